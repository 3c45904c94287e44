class MalformedContainer(ValueError):
    """The container's length prefix, header or a table it references is unreadable."""


class CyclicPathReference(ValueError):
    """A source's parent chain loops back onto itself."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Cyclic parent chain through source {index}")
        self.index = index
