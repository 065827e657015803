"""User administration web application.

Server-rendered pages for listing, creating, editing and deleting users,
backed by a single SQLModel table.
"""

__version__ = "0.1.0"
