"""Loading and rendering of the generation template."""

import logging
import string
from pathlib import Path
from typing import Union

from exception_factory.constants.constants import TEMPLATE_PLACEHOLDERS
from exception_factory.core.exceptions import TemplateLoadError

logger = logging.getLogger(__name__)


def load_template(template_path: Union[str, Path]) -> str:
    """
    Read the generation template.

    Args:
        template_path: Path to the template resource

    Returns:
        Template text

    Raises:
        TemplateLoadError: If the file is missing, unreadable or lacks a placeholder
    """
    path = Path(template_path)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateLoadError(f"Cannot load exception template {path}: {e}") from e

    found = {field for _, field, _, _ in string.Formatter().parse(text) if field}
    missing = [p for p in TEMPLATE_PLACEHOLDERS if p not in found]
    if missing:
        raise TemplateLoadError(f"Exception template {path} is missing placeholders {missing}")
    unexpected = sorted(found - set(TEMPLATE_PLACEHOLDERS))
    if unexpected:
        raise TemplateLoadError(f"Exception template {path} has unknown placeholders {unexpected}")

    logger.debug(f"Loaded exception template from {path}")
    return text


def render_template(template: str, namespace: str, class_name: str, extends: str) -> str:
    """Substitute the three placeholders into the template."""
    return template.format_map({
        "namespace": namespace,
        "class": class_name,
        "extends": extends,
    })
