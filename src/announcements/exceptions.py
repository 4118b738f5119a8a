"""Startup errors for the announcements service.

Both are fatal: the server entry point logs them and exits before any
watcher is subscribed.
"""


class AnnouncementsError(Exception):
    """Base class for announcements service errors."""


class ConfigurationError(AnnouncementsError):
    """An environment setting is missing or has an unusable value."""


class CredentialsError(ConfigurationError):
    """The Firebase service-account credential is missing or malformed."""
