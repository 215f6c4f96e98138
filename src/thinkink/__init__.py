"""ThinkInk - a small blogging backend.

Users register and log in with a username and password, receive a signed
session cookie, and publish posts whose cover images live in an external
media store.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
