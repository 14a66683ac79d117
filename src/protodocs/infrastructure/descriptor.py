"""Read and validate the generator's JSON output."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from protodocs.domain.descriptor import DaemonDescriptor
from protodocs.domain.errors import DescriptorError

logger = logging.getLogger(__name__)


def load_descriptor(path: Path) -> DaemonDescriptor:
    """Load a daemon descriptor from a JSON file.

    Raises:
        DescriptorError: The file is missing, unreadable, not UTF-8, or
            does not match the descriptor schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read descriptor {path}: {exc}"
        raise DescriptorError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"Descriptor {path} is not UTF-8 text: {exc.reason} at byte {exc.start}"
        raise DescriptorError(msg) from exc

    try:
        descriptor = DaemonDescriptor.model_validate_json(raw)
    except ValidationError as exc:
        msg = f"Invalid descriptor {path}: {exc.error_count()} validation error(s)\n{exc}"
        raise DescriptorError(msg) from exc

    logger.debug("Loaded descriptor %s with %d files", path, len(descriptor.files))
    return descriptor
