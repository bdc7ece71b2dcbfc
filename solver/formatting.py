"""Plain-text and LaTeX rendering of matrix snapshots and transcripts."""


def _cell_widths(matrix) -> list:
    cols = len(matrix[0]) if matrix else 0
    return [
        max(len(matrix[i][j].to_display_string()) for i in range(len(matrix)))
        for j in range(cols)
    ]


def format_matrix(matrix, highlight_row=None) -> str:
    """Render an augmented matrix as a bracketed text grid.

    The last column is set off by ``|`` and the highlighted row, if any, is
    marked with ``>``::

          [ 1  1 | 3 ]
        > [ 0  0 | 0 ]
    """
    if not matrix:
        return "[ ]"
    n = len(matrix)
    widths = _cell_widths(matrix)
    lines = []
    for i, row in enumerate(matrix):
        cells = [row[j].to_display_string().rjust(widths[j]) for j in range(len(row))]
        if len(row) > n:
            body = "  ".join(cells[:n]) + " | " + "  ".join(cells[n:])
        else:
            body = "  ".join(cells)
        marker = "> " if i == highlight_row else "  "
        lines.append(f"{marker}[ {body} ]")
    return "\n".join(lines)


def format_matrix_latex(matrix) -> str:
    """Render an augmented matrix as a LaTeX ``array`` with a vertical bar."""
    n = len(matrix)
    cols = len(matrix[0]) if matrix else 0
    spec = "c" * n + ("|" + "c" * (cols - n) if cols > n else "")
    rows = " \\\\ ".join(" & ".join(v.to_latex() for v in row) for row in matrix)
    return f"\\left[\\begin{{array}}{{{spec}}} {rows} \\end{{array}}\\right]"


def format_trace(result, solution_lines=None) -> str:
    """Numbered steps, each with its matrix, followed by the result summary."""
    blocks = []
    for number, step in enumerate(result.steps, 1):
        blocks.append(
            f"Step {number}: {step.description}\n"
            f"{format_matrix(step.matrix, step.highlight_row)}"
        )
    lines = solution_lines if solution_lines is not None else result.solution_text
    summary = [
        f"rank(A) = {result.rank_a}, rank([A|b]) = {result.rank_aug}",
        f"Solution type: {result.solution_type.value}",
    ]
    summary.extend(lines)
    blocks.append("\n".join(summary))
    return "\n\n".join(blocks)
