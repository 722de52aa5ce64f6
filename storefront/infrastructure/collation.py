"""Process collation locale used by the name and category comparators."""

import locale

import structlog

logger = structlog.get_logger()


def apply_collation_locale(name: str | None) -> bool:
    """Set ``LC_COLLATE`` for the process.

    Args:
        name: Locale name such as ``"en_PH.UTF-8"``. None keeps the
            current collation (``"C"`` unless the host changed it).

    Returns:
        True if the locale is in effect, False if it is not installed.
    """
    if not name:
        return True
    try:
        locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error as e:
        logger.warning(
            "Collation locale unavailable, keeping current",
            requested=name,
            current=locale.setlocale(locale.LC_COLLATE),
            error=str(e),
        )
        return False
    logger.info("Collation locale set", locale=name)
    return True
