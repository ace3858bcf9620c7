"""recyclectl - terminal file manager with recycle bin support.

Moves files to the trash, restores and purges trashed items by fuzzy
name, deletes permanently and shreds file content before deletion.
"""

__version__ = "1.0.0"
