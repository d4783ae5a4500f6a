"""
Restaurant directory.

Responsibilities:
- Hold the directory snapshot in memory and serve coarse lookups.
- Create and update directory entries for the internal interface.
- Summarize the directory by cuisine and city.
- Coerce raw query parameters into search criteria for the matcher.
"""
