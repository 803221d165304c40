"""Pick the output mode for a ServiceResult: Rich text for humans, JSON for machines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ctkit.output.renderers import render_result

if TYPE_CHECKING:
    from ctkit.services.result import ServiceResult


def format_result(
    result: ServiceResult, *, json_output: bool = False, verbose: bool = False
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: Return the serialized result instead of Rich text.
        verbose: Include the full error detail in human output.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    return render_result(result, verbose=verbose)
