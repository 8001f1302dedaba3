"""
Static category table of the text classifier.

The classifier answers with one of ten diacritic-stripped Vietnamese labels.
Each label maps one-to-one onto its diacritic-restored display form and a
short English description. Model selectors map onto the names of the two
remote models.
"""

from typing import NamedTuple, Optional


class Category(NamedTuple):
    api_label: str
    display_label: str
    description: str


CATEGORIES = (
    Category("Chinh tri Xa hoi", "Chính trị Xã hội", "Politics and Society"),
    Category("Doi song", "Đời sống", "Lifestyle"),
    Category("Khoa hoc", "Khoa học", "Science"),
    Category("Kinh doanh", "Kinh doanh", "Business"),
    Category("Phap luat", "Pháp luật", "Law"),
    Category("Suc khoe", "Sức khỏe", "Health"),
    Category("The gioi", "Thế giới", "World"),
    Category("The thao", "Thể thao", "Sports"),
    Category("Van hoa", "Văn hóa", "Culture"),
    Category("Vi tinh", "Vi tính", "Computing and Technology"),
)

MODEL_NAMES = {1: "ViT5", 2: "PhoBERT"}

_BY_API_LABEL = {category.api_label: category for category in CATEGORIES}
_BY_DISPLAY_LABEL = {category.display_label: category for category in CATEGORIES}


def find_category(api_label: str) -> Optional[Category]:
    """Return the category for an API label, or None when the label is unknown."""
    return _BY_API_LABEL.get(api_label)


def to_display_label(api_label: str) -> Optional[str]:
    category = _BY_API_LABEL.get(api_label)
    return category.display_label if category else None


def to_api_label(display_label: str) -> Optional[str]:
    category = _BY_DISPLAY_LABEL.get(display_label)
    return category.api_label if category else None


def resolve_label(api_label: str) -> tuple[str, str]:
    """
    Resolve an API label into `(display_label, description)`.

    Unknown labels pass through unchanged as both the display label and the
    description.
    """
    category = _BY_API_LABEL.get(api_label)
    if category is None:
        return api_label, api_label
    return category.display_label, category.description


def model_name(model_type: int) -> str:
    return MODEL_NAMES.get(model_type, f"model {model_type}")
