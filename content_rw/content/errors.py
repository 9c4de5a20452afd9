"""Content write exceptions."""


class InvalidPublishedDateError(ValueError):
    """Raised when publishedDate is not an RFC3339 timestamp."""

    def __init__(self, published_date: str):
        self.published_date = published_date
        super().__init__(f'parsing time "{published_date}" as RFC3339 failed')
