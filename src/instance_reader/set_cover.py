"""Weighted set cover instance format parser.

Format (all indices 1-based)::

    <num_constraints> <num_variables>
    <cost of variable 1> <cost of variable 2> ...      (wrapped over any number of lines)
    <number of variables covering constraint 1>
    <variable> <variable> ...                           (wrapped over any number of lines)
    <number of variables covering constraint 2>
    ...

This is the layout of the OR-Library ``scp*`` files.

Example:
    2 3
    5 6 7
    2
    1 2
    1
    3
"""

from __future__ import annotations

import logging
import os

from .data import ReaderOptions, SetCoverData, SetCoverInstance, build_set_cover_instance
from .exceptions import InvalidInstanceError
from .io import decode_source, read_source_lines
from .scanner import LineCursor

logger = logging.getLogger(__name__)


def parse_set_cover_lines(lines: list[str]) -> SetCoverData:
    """Parse trimmed set cover lines into raw data.

    Raises:
        UnexpectedEndOfInputError: If the input ends before all declared data is read.
        InvalidTokenError: If a token is not an integer or a line has extra tokens.
        IndexOutOfRangeError: If a variable index lies outside [1, num_variables].
        InvalidInstanceError: If a declared count is negative.
    """
    cursor = LineCursor(lines)

    header = cursor.next_fields("problem header", skip_blank=True)
    num_constraints = cursor.field_int(header, 0, "number of constraints")
    num_variables = cursor.field_int(header, 1, "number of variables")
    cursor.reject_extra_fields(header, 2, "problem header")
    if num_constraints < 0 or num_variables < 0:
        raise InvalidInstanceError(
            f"Counts cannot be negative, got {num_constraints} constraints and "
            f"{num_variables} variables.",
            cursor.line_number,
        )

    costs = cursor.read_ints(num_variables, "variable costs")

    # Transpose the constraint -> variables lists as they are read.
    incidence: dict[int, list[int]] = {v: [] for v in range(1, num_variables + 1)}
    for constraint in range(1, num_constraints + 1):
        context = f"size of constraint {constraint}"
        fields = cursor.next_fields(context, skip_blank=True)
        size = cursor.field_int(fields, 0, context)
        cursor.reject_extra_fields(fields, 1, context)
        if size < 0:
            raise InvalidInstanceError(
                f"Constraint {constraint} declares a negative number of variables ({size}).",
                cursor.line_number,
            )
        covering = cursor.read_ints(
            size, f"variables of constraint {constraint}", kind="variable", bound=num_variables
        )
        for variable in covering:
            incidence[variable].append(constraint)

    return SetCoverData(
        num_constraints=num_constraints,
        num_variables=num_variables,
        variable_costs=costs,
        variable_to_constraints=incidence,
    )


def _build(data: SetCoverData) -> SetCoverInstance:
    return build_set_cover_instance(
        num_constraints=data.num_constraints,
        num_variables=data.num_variables,
        variable_costs=data.variable_costs,
        variable_to_constraints=data.variable_to_constraints,
    )


def parse_set_cover_string(
    content: str | bytes, options: ReaderOptions | None = None
) -> SetCoverInstance:
    """Parse a set cover instance held in memory."""
    options = options or ReaderOptions()
    return _build(parse_set_cover_lines(decode_source(content, options.encoding)))


def read_set_cover_data(
    path: str | os.PathLike[str], options: ReaderOptions | None = None
) -> SetCoverData:
    """Read raw set cover data (counts, costs and incidence lists) from a file."""
    options = options or ReaderOptions()
    return parse_set_cover_lines(read_source_lines(path, options.encoding))


def read_set_cover_instance(
    path: str | os.PathLike[str], options: ReaderOptions | None = None
) -> SetCoverInstance:
    """Read a weighted set cover instance from a file.

    Args:
        path: Path to the instance file.
        options: Reader options; defaults to ReaderOptions().

    Returns:
        Validated, immutable SetCoverInstance.

    Raises:
        IoFailureError: If the file cannot be read.
        InstanceReaderError: Any subclass describing the first format violation.

    Example:
        >>> instance = read_set_cover_instance("scp41.txt")
        >>> instance.num_constraints, instance.num_variables
        (200, 1000)
    """
    instance = _build(read_set_cover_data(path, options))
    logger.info(
        f"Parsed set cover instance {path}: {instance.num_constraints} constraints, "
        f"{instance.num_variables} variables, {instance.num_incidences} incidences"
    )
    return instance
