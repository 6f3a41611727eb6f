"""Role titles.

Roles are looked up by title. Titles are compared in their canonical,
camelized form, so ``"superuser"``, ``:superuser``-style symbols and
``"Superuser"`` all name the same role.
"""

import re

from django.db import models

_LEADING_WORD = re.compile(r"^[a-z\d]*")
_UNDERSCORED_WORD = re.compile(r"_([a-z\d]*)", re.IGNORECASE)


class SystemRole(models.TextChoices):
    """Roles the accounts system itself relies on."""

    REFINERY = "Refinery", "Refinery"
    SUPERUSER = "Superuser", "Superuser"


def canonical_title(title) -> str:
    """Camelize a role title.

    The leading lower-case word and every underscore-separated word are
    capitalized and the underscores dropped:

        >>> canonical_title("superuser")
        'Superuser'
        >>> canonical_title("site_admin")
        'SiteAdmin'
        >>> canonical_title("Refinery")
        'Refinery'
    """
    text = str(title)
    text = _LEADING_WORD.sub(lambda m: m.group(0).capitalize(), text, count=1)
    return _UNDERSCORED_WORD.sub(lambda m: m.group(1).capitalize(), text)
