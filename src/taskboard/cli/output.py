"""Terminal output for the one-shot board listing."""

import sys

from ..models import Stage, Task

GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
DIM = "\033[2m"
BOLD = "\033[1m"
RESET = "\033[0m"
CHECK = "\u2713"  # ✓
CROSS = "\u2717"  # ✗
BULLET = "\u2022"  # •
ELLIPSIS = "\u2026"  # …

# Marker colour per stage
STAGE_COLORS: dict[Stage, str] = {
    Stage.TODO: YELLOW,
    Stage.IN_PROGRESS: BLUE,
    Stage.DONE: GREEN,
}

PREVIEW_WIDTH = 60


def _use_color() -> bool:
    return sys.stdout.isatty() if hasattr(sys.stdout, "isatty") else False


def _paint(text: str, *codes: str) -> str:
    if not codes or not _use_color():
        return text
    return "".join(codes) + text + RESET


def preview(text: str, width: int = PREVIEW_WIDTH) -> str:
    """First non-blank line of a description, cut to width."""
    line = next((ln.strip() for ln in text.splitlines() if ln.strip()), "")
    if len(line) > width:
        return line[: width - 1] + ELLIPSIS
    return line


def format_column_heading(stage: Stage, title: str, count: int) -> str:
    """``To Do (2)`` with the stage colour applied."""
    return _paint(f"{title} ({count})", BOLD, STAGE_COLORS[stage])


def format_task_lines(task: Task) -> list[str]:
    """The id and title line, plus a dimmed description preview if any."""
    marker = _paint(BULLET, STAGE_COLORS[task.stage])
    lines = [f"  {marker} {_paint(f'[{task.id}]', DIM)} {task.title}"]
    summary = preview(task.description)
    if summary:
        lines.append(_paint(f"      {summary}", DIM))
    return lines


def column(stage: Stage, title: str, tasks: tuple[Task, ...]) -> None:
    """Print one board column."""
    print(format_column_heading(stage, title, len(tasks)))
    if not tasks:
        print(_paint(f"  No {stage.value.replace('_', ' ')} tasks", DIM))
    for task in tasks:
        print("\n".join(format_task_lines(task)))


def success(message: str) -> None:
    """Print a summary line with a green check."""
    print(f"{_paint(CHECK, GREEN)} {message}")


def warning(message: str) -> None:
    """Print a non-fatal problem, such as falling back to default config."""
    print(f"{_paint(BULLET, YELLOW)} {message}")


def error(message: str) -> None:
    """Print a failure with a red cross."""
    print(f"{_paint(CROSS, RED)} {message}")
