"""
Customer Segment Template

Declarative segmentation template registered with the admin host:
customers whose first and only order included a given product.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Mapping

# Must match the target declared in the extension's configuration
TARGET = "admin.customers.segmentation-templates.render"

FIRST_PURCHASE_QUERY = "number_of_orders = 1 AND products_purchased(id: (product_id)) = true"
FIRST_PURCHASE_QUERY_TO_INSERT = "number_of_orders = 1 AND products_purchased(id: ("
FIRST_PURCHASE_CREATED_ON = datetime(2023, 8, 15, tzinfo=timezone.utc)


def to_iso_timestamp(moment: datetime) -> str:
    """Format a UTC datetime with millisecond precision, e.g. 2023-08-15T00:00:00.000Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class SegmentTemplate:
    """Segmentation template as rendered by the host."""
    title: str
    description: str
    created_on: datetime
    query: str
    query_to_insert: str

    def to_dict(self) -> Dict[str, str]:
        """Serialize with the host's property names."""
        return {
            "title": self.title,
            "description": self.description,
            "createdOn": to_iso_timestamp(self.created_on),
            "query": self.query,
            "queryToInsert": self.query_to_insert,
        }


def translate(translations: Mapping[str, str], key: str) -> str:
    try:
        return translations[key]
    except KeyError:
        raise KeyError(f"Missing translation: {key}") from None


def build_first_purchase_template(translations: Mapping[str, str]) -> SegmentTemplate:
    """
    Build the "first-time buyers of a product" template.

    Args:
        translations: Locale strings, must contain "title" and "description"

    Raises:
        KeyError: If a translation is missing
    """
    return SegmentTemplate(
        title=translate(translations, "title"),
        description=translate(translations, "description"),
        created_on=FIRST_PURCHASE_CREATED_ON,
        query=FIRST_PURCHASE_QUERY,
        query_to_insert=FIRST_PURCHASE_QUERY_TO_INSERT,
    )
