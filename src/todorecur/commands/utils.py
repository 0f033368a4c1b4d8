"""Helpers shared by command modules."""

from todorecur.services.config_service import get_config_service


def resolve_output_format(output: str | None, json_opt: bool = False) -> str:
    """Pick the output format: --json, then --output, then config."""
    if json_opt:
        return "json"
    if output:
        return output
    return get_config_service().config.output.format
