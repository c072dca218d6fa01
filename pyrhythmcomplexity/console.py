"""
Console utilities and Rich formatting for PyRhythmComplexity.

Provides CLI output with the Rich library:
- Styled tables and panels
- Status messages
- CLI --help option/command groups
"""

from rich.box import ROUNDED
from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

# Module-level rich console instance
rich_console = Console()

# ============================================================================
# STYLES
# ============================================================================

STYLE_SUCCESS = Style(color="green", bold=True)
STYLE_ERROR = Style(color="red", bold=True)
STYLE_WARNING = Style(color="yellow")
STYLE_INFO = Style(color="cyan")
STYLE_DIM = Style(dim=True)
STYLE_HEADER = Style(color="bright_white", bold=True)
STYLE_SCORE_HIGH = Style(color="red", bold=True)
STYLE_SCORE_MED = Style(color="yellow")
STYLE_SCORE_LOW = Style(color="green")

# Complexity thresholds used for colouring only
SCORE_HIGH = 1.0
SCORE_MED = 0.4


# ============================================================================
# UI COMPONENTS
# ============================================================================

def print_header(title: str, subtitle: str = None):
    """Print a styled header."""
    header_text = Text(title, style=STYLE_HEADER)
    if subtitle:
        header_text.append(f"\n{subtitle}", style=STYLE_DIM)

    panel = Panel(
        header_text,
        box=ROUNDED,
        border_style="cyan",
        padding=(0, 2),
    )
    rich_console.print(panel)


def print_status(message: str, status: str = "info"):
    """Print a styled status message."""
    icons = {
        "success": ("✓", STYLE_SUCCESS),
        "error": ("✗", STYLE_ERROR),
        "warning": ("⚠", STYLE_WARNING),
        "info": ("•", STYLE_INFO),
    }
    icon, style = icons.get(status, ("•", STYLE_INFO))
    rich_console.print(f"[{style.color}]{icon}[/] {message}")


def score_to_style(score: float) -> Style:
    """Get appropriate style for a complexity value."""
    if score >= SCORE_HIGH:
        return STYLE_SCORE_HIGH
    elif score >= SCORE_MED:
        return STYLE_SCORE_MED
    else:
        return STYLE_SCORE_LOW


def format_score(score: float, width: int = 8) -> Text:
    """Format a complexity value with appropriate coloring."""
    text = f"{score:.4f}".rjust(width)
    return Text(text, style=score_to_style(score))


def create_results_table(
    title: str,
    columns: list[tuple[str, str, str]],  # (name, style, justify)
    caption: str | None = None,
) -> Table:
    """Create a styled results table."""
    table = Table(
        title=title,
        caption=caption,
        box=ROUNDED,
        header_style="bold cyan",
        border_style="dim",
        row_styles=["", "dim"],
    )

    for name, style, justify in columns:
        table.add_column(name, style=style, justify=justify)

    return table


# ============================================================================
# CLI HELP STYLING
# ============================================================================

# Creating groups for CLI --help styling
_basic_options = ["--path"]
_evaluation_options = ["--clock-rate", "--interval"]
_export_options = ["--output-dir", "--export-to"]
_batch_options = ["--recursive", "--flatten"]


def _option_groups(additional_basic_options=None):
    if additional_basic_options is not None:
        combined_basic_options = _basic_options + additional_basic_options
    else:
        combined_basic_options = _basic_options
    return [
        {
            "name": "Basic options",
            "options": combined_basic_options,
        },
        {
            "name": "Evaluation options",
            "options": _evaluation_options,
        },
        {
            "name": "Export options",
            "options": _export_options,
        },
        {
            "name": "Batch options",
            "options": _batch_options,
        },
    ]


_OPTION_GROUPS = {
    "pyrhythmcomplexity evaluate": _option_groups(["--top"]),
    "pyrhythmcomplexity export-scores": _option_groups(),
}

_COMMAND_GROUPS = {
    "pyrhythmcomplexity": [
        {
            "name": "Analysis Commands",
            "commands": [
                "evaluate",
                "coefficient",
            ],
        },
        {
            "name": "Export Commands",
            "commands": [
                "export-scores",
            ],
        },
    ]
}
