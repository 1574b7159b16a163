class ScraperError(RuntimeError):
    """Failure that prevents reaching a parseable page state."""


class NavigationError(ScraperError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Navigation to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class DialogDismissError(ScraperError):
    pass


class SurfaceError(ScraperError):
    """The page went away or stopped answering after navigation succeeded."""

    def __init__(self, action: str, reason: str) -> None:
        super().__init__(f"Page {action} failed: {reason}")
        self.action = action
        self.reason = reason
