"""
Domain exceptions raised by services and mapped to HTTP errors by the routes
"""


class MonitorError(Exception):
    """Base class for application errors"""


class NotFoundError(MonitorError):
    """A requested row (project, video, article, site...) does not exist"""


class ValidationError(MonitorError):
    """Input that cannot be processed, e.g. a video without transcript"""


class FeedParseError(MonitorError):
    """The YouTube RSS feed could not be parsed"""
