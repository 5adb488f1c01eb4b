# src/todo_app/client/view.py

from __future__ import annotations

from .store import TodoState, completed_count, pending_count, select_error, select_items, select_loading

PROMPT = "Add a task... "
DELETE_MARK = "×"

_STRIKE = "\033[9m"
_DIM = "\033[2m"
_RED = "\033[31m"
_RESET = "\033[0m"


def _struck(text: str, color: bool) -> str:
    if color:
        return f"{_STRIKE}{_DIM}{text}{_RESET}"
    return f"~~{text}~~"


def summary_line(state: TodoState) -> str:
    return f"{pending_count(state)} pending, {completed_count(state)} completed"


def render(state: TodoState, *, title: str = "Todo App", color: bool = True) -> str:
    """
    Text view of the store: title, error banner, counts, one numbered row per
    task (completed ones struck through) with a delete marker.
    """
    items, loading, error = select_items(state), select_loading(state), select_error(state)
    if loading and not items:
        return "Loading todos..."

    lines = [title]

    if error:
        banner = f"[!] {error}"
        lines.append(f"{_RED}{banner}{_RESET}" if color else banner)

    lines.append(summary_line(state))

    for n, task in enumerate(items, start=1):
        text = _struck(task.text, color) if task.completed else task.text
        lines.append(f"  {n}. {text}  {DELETE_MARK}")

    if not items and not loading:
        lines.append("No todos yet. Add one above!")

    return "\n".join(lines)
