"""Application settings read from the ``[custom]`` table of domain.toml."""

from protean.utils.globals import current_domain


def custom_setting(name: str, default=None):
    custom = current_domain.config.get("custom") or {}
    return custom.get(name, default)
