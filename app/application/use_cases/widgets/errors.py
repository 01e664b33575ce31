"""Errors raised by the widget use cases."""


class WidgetNotFoundError(ValueError):
    """A referenced record does not exist for the current subscriber."""


class WidgetRequestError(ValueError):
    """The request cannot be fulfilled with the provided input."""


__all__ = ["WidgetNotFoundError", "WidgetRequestError"]
