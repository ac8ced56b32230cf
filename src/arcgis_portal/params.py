import logging
from typing import Any, Mapping, Optional

_OVERRIDDEN_PARAM_LOG_MESSAGE = (
    "Custom parameter %r overrides the value derived from %s."
)


def append_custom_params(
    base: Mapping[str, Any],
    custom: Optional[Mapping[str, Any]],
    *,
    operation: str = "the method arguments",
) -> dict[str, Any]:
    """Merge custom request parameters over parameters built from method arguments.

    Custom parameters take precedence. Parameters with a value of ``None`` are dropped
    so that optional arguments which haven't been passed aren't sent to the portal.
    Neither ``base`` nor ``custom`` are modified.

    """
    custom = custom or {}

    for key in sorted(custom.keys() & base.keys()):
        if base[key] is not None:
            logging.warning(_OVERRIDDEN_PARAM_LOG_MESSAGE, key, operation)

    merged = {**base, **custom}
    return {k: v for k, v in merged.items() if v is not None}
