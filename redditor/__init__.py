"""Watch a subreddit listing and report new posts as they appear."""

__version__ = "0.1.0"
