"""Selection of expired images to purge."""

from typing import Iterable, List

from ami_cleaner.core.models.ami import AMIInfo
from ami_cleaner.core.models.criteria import FilterCriteria


def is_expired(image: AMIInfo, criteria: FilterCriteria) -> bool:
    # Images without a creation date are never treated as expired
    if image.creation_date is None:
        return False
    return image.creation_date < criteria.expiration_cutoff


def matches_name(image: AMIInfo, criteria: FilterCriteria) -> bool:
    if not criteria.name_prefix:
        return True
    return image.name.startswith(criteria.name_prefix)


def matches_tag(image: AMIInfo, criteria: FilterCriteria) -> bool:
    """Tag test, negated when ``criteria.invert`` is set."""
    if not criteria.has_tag_filter:
        return True
    return image.has_tag(criteria.tag_key, criteria.tag_value) != criteria.invert


def select_expired_images(
    images: Iterable[AMIInfo], criteria: FilterCriteria
) -> List[AMIInfo]:
    """Return the purge candidates from ``images``, preserving input order.

    An image is a candidate when it was created before the cutoff, its name
    starts with the prefix (if one is set), and it passes the tag test.
    Only the tag test is affected by ``invert``.
    """
    return [
        image
        for image in images
        if is_expired(image, criteria)
        and matches_name(image, criteria)
        and matches_tag(image, criteria)
    ]
