"""Customer segmentation templates."""

from .template import TARGET, SegmentTemplate, build_first_purchase_template

__all__ = ['TARGET', 'SegmentTemplate', 'build_first_purchase_template']
