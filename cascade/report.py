from typing import List

SAFE_MESSAGE = "All relations cascade. Entries can be safely deleted."


def render_chain(chain: List[str]) -> List[str]:
    lines = []
    for depth, table_name in enumerate(chain):
        if depth == 0:
            lines.append(table_name)
        else:
            lines.append("  " * depth + "└ " + table_name)
    return lines


def render_report(result) -> List[str]:
    if result.safe:
        return [SAFE_MESSAGE]

    lines = [
        f"Found a NON-CASCADING relation between tables: '{result.parent_table}' <-> '{result.child_table}'",
        "This relation can cause 'FOREIGN KEY constraint failed' error when deleting.",
        "Full relation chain:",
    ]
    lines.extend(render_chain(result.chain))
    return lines
