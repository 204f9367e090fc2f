from sqlalchemy.orm import Session

from core import errors
from core.text import normalize_tag
from models.entry import ENTRY_MODELS
from repositories.entry_repo import EntryRepository
from repositories.tag_repo import TagMetadataRepository

DEFAULT_ICON = "TagIcon"

ALLOWED_ICONS = frozenset({
    "AirplaneIcon", "AppleLogoIcon", "BankIcon", "BasketIcon", "BeerBottleIcon",
    "BicycleIcon", "BookIcon", "BookOpenIcon", "BriefcaseIcon", "BrainIcon",
    "BugIcon", "BuildingsIcon", "CakeIcon", "CalendarIcon", "CarIcon",
    "CatIcon", "ChatCircleIcon", "ClockIcon", "CloudIcon", "CoffeeIcon",
    "CookingPotIcon", "DogIcon", "FilmSlateIcon", "FireIcon", "FlagIcon",
    "FlowerIcon", "ForkKnifeIcon", "GameControllerIcon", "GlobeIcon", "GraduationCapIcon",
    "HeartIcon", "HouseIcon", "LeafIcon", "LightbulbIcon", "MoonIcon",
    "MusicNotesIcon", "PaintBrushIcon", "PawPrintIcon", "PersonIcon", "PlantIcon",
    "ShoppingCartIcon", "SmileyIcon", "SneakerIcon", "StarIcon", "SunIcon",
    "TagIcon", "TrainIcon", "TreeIcon", "UsersIcon", "WrenchIcon",
})

TAG_COLOR_CLASSES = frozenset({
    "tag-color-teal",
    "tag-color-blue",
    "tag-color-orange",
    "tag-color-red",
    "tag-color-purple",
})


class TagService:
    def __init__(self, db: Session):
        self.metadata = TagMetadataRepository(db)
        self.entries = {kind: EntryRepository(db, model) for kind, model in ENTRY_MODELS.items()}

    def list_tags(self, user_id: int) -> list[dict]:
        """Every tag in use or decorated, with usage counts and fallback styling."""
        counts: dict[str, dict[str, int]] = {}
        for kind, repo in self.entries.items():
            for entry in repo.list_entries(user_id):
                for tag in entry.tags or []:
                    counts.setdefault(tag, {k: 0 for k in self.entries})[kind] += 1

        decorated = {meta.tag_name: meta for meta in self.metadata.list_metadata(user_id)}
        summary = []
        for name in sorted(set(counts) | set(decorated)):
            meta = decorated.get(name)
            usage = counts.get(name, {k: 0 for k in self.entries})
            summary.append({
                "tag_name": name,
                "icon_name": meta.icon_name if meta else DEFAULT_ICON,
                "color_class": meta.color_class if meta else None,
                "has_metadata": meta is not None,
                "word_count": usage["words"],
                "translation_count": usage["translations"],
            })
        return summary

    def entries_for_tag(self, *, user_id: int, tag_name: str) -> dict[str, list]:
        tag = normalize_tag(tag_name)
        return {kind: repo.list_entries(user_id, tag=tag) for kind, repo in self.entries.items()}

    def save_metadata(self, *, user_id: int, tag_name: str, icon_name: str | None, color_class: str | None):
        tag = normalize_tag(tag_name)
        if not tag:
            raise errors.ValidationError("Tag name cannot be empty.")
        icon_name = icon_name or DEFAULT_ICON
        if icon_name not in ALLOWED_ICONS:
            raise errors.ValidationError(f'Unknown icon "{icon_name}"', details={"field": "icon_name"})
        if color_class is not None and color_class not in TAG_COLOR_CLASSES:
            raise errors.ValidationError(f'Unknown color "{color_class}"', details={"field": "color_class"})
        return self.metadata.save_metadata(user_id=user_id, tag_name=tag, icon_name=icon_name, color_class=color_class)

    def delete_metadata(self, *, user_id: int, tag_name: str) -> None:
        self.metadata.delete_metadata(user_id=user_id, tag_name=normalize_tag(tag_name))
