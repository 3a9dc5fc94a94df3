class BasketMinerError(Exception):
    """Base class of every error raised by basketminer."""


class ValidationError(BasketMinerError, ValueError):
    """A raw (entity_id, item) row is malformed or empty."""

    def __init__(self, message, row_index=None):
        if row_index is not None:
            message = "row %d: %s" % (row_index, message)
        super().__init__(message)
        self.row_index = row_index


class InvalidParameter(BasketMinerError, ValueError):
    """A mining parameter is outside of its valid range."""

    def __init__(self, name, value, expected):
        super().__init__("%s=%r is invalid, expected %s" % (name, value, expected))
        self.name = name
        self.value = value


class MiningAborted(BasketMinerError):
    """The abort signal was set while the level-wise search was running."""

    def __init__(self, level, itemsets_found):
        super().__init__("mining aborted before level %d (%d frequent itemsets found so far)"
                         % (level, itemsets_found))
        # the last level that was fully counted
        self.level = level - 1
        self.itemsets_found = itemsets_found
