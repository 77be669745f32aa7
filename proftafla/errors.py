class ProftaflaError(Exception):
    """Base class for errors raised by this package."""


class FetchError(ProftaflaError):
    """Upstream answered with something other than 200."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"Non 200 status from url: {status_code}")
        self.url = url
        self.status_code = status_code
