"""Extended-attribute tagging of clustered files."""

from .errors import TagError
from .manager import TagManager
from .store import XDG_TAGS_ATTRIBUTE, TagStore, XattrTagStore

__all__ = ["TagError", "TagManager", "TagStore", "XattrTagStore", "XDG_TAGS_ATTRIBUTE"]
