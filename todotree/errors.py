"""
TODOTREE - Errors
=================
Lookups that simply miss return None. These exceptions cover misuse the
caller has to deal with explicitly.
"""


class TodoTreeError(Exception):
    """Base class for todotree errors"""


class UnknownParentError(TodoTreeError, LookupError):
    """add() was given a parent id that names no live node"""

    def __init__(self, parent_id):
        self.parent_id = parent_id
        super().__init__(f"Unknown parent node: {parent_id!r}")


class NodeNotFoundError(TodoTreeError, LookupError):
    """A user-supplied id names no node of the expected kind"""

    def __init__(self, node_id, expected: str = "node"):
        self.node_id = node_id
        self.expected = expected
        super().__init__(f"No {expected} with id {node_id!r}")


class DocumentNotFoundError(TodoTreeError):
    """A named task tree does not exist on disk"""

    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Task tree not found: {document_id}")


class DocumentReadError(TodoTreeError):
    """A saved task tree exists but cannot be parsed"""

    def __init__(self, document_id: str, reason: str):
        self.document_id = document_id
        self.reason = reason
        super().__init__(f"Cannot read task tree {document_id}: {reason}")
