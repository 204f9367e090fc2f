from models.user import User
from models.profile import Profile
from models.language import Language
from models.entry import ENTRY_MODELS, Translation, Word
from models.tag_metadata import TagMetadata

__all__ = ["User", "Profile", "Language", "Word", "Translation", "ENTRY_MODELS", "TagMetadata"]
