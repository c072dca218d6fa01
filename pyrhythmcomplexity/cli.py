import functools
import logging
import os
import warnings

import rich_click as click
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TimeElapsedColumn
from rich.traceback import install as rich_traceback_handler

from pyrhythmcomplexity import __version__
from pyrhythmcomplexity.console import (
    _COMMAND_GROUPS,
    _OPTION_GROUPS,
    print_header,
    print_status,
    rich_console,
)
from pyrhythmcomplexity.difficulty.evaluators.rhythm import coefficient
from pyrhythmcomplexity.exceptions import NotEnoughObjectsError, TimingLoadError
from pyrhythmcomplexity.handler import BatchHandler, ComplexityExportHandler, ComplexityHandler
from pyrhythmcomplexity.utils import get_outputdir

# CLI --help styling
click.rich_click.OPTION_GROUPS = _OPTION_GROUPS
click.rich_click.COMMAND_GROUPS = _COMMAND_GROUPS
click.rich_click.USE_RICH_MARKUP = True
# End CLI styling


@click.group("pyrhythmcomplexity")
@click.option("--debug", "-d", is_flag=True, default=False, help="Enables debugging mode.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enables verbose logging output.")
@click.option("--ms", "-m", is_flag=True, default=False, help="Display onset times in milliseconds instead of the default mm:ss.sss format.")
@click.version_option(__version__, prog_name="pyrhythmcomplexity", message="%(prog)s %(version)s")
def cli_main(debug, verbose, ms):
    """Per-note rhythm complexity of timing-based rhythm game charts, from their note onset times."""
    # Store flags in environ instead of passing them as parameters
    if debug:
        os.environ["PRC_DEBUG"] = "1"
        warnings.simplefilter("default")
        rich_traceback_handler(console=rich_console, suppress=[click])
    else:
        warnings.filterwarnings("ignore")

    if verbose:
        os.environ["PRC_VERBOSE"] = "1"
    if ms:
        os.environ["PRC_DISPLAY_MS"] = "1"

    if verbose:
        logging.basicConfig(format="%(message)s", level=logging.INFO, handlers=[RichHandler(level=logging.INFO, console=rich_console, rich_tracebacks=True, show_path=debug, show_time=False, tracebacks_suppress=[click])])
    else:
        logging.basicConfig(format="%(message)s", level=logging.ERROR, handlers=[RichHandler(level=logging.ERROR, console=rich_console, show_time=False, show_path=False)])


def common_evaluation_options(f):
    @click.option("--clock-rate", type=click.FloatRange(min=0, min_open=True), default=1.0, show_default=True, help="Playback rate of the chart (e.g. 1.5 for a sped-up track). Intervals are divided by it.")
    @click.option("--interval", type=click.Choice(("strain", "delta"), case_sensitive=False), default="strain", show_default=True, help="strain: intervals bounded below by 25ms; delta: raw time between onsets.")

    @functools.wraps(f)
    def wrapper_common_options(*args, **kwargs):
        return f(*args, **kwargs)

    return wrapper_common_options


def common_export_options(f):
    @click.option('--output-dir', '-o', type=click.Path(exists=False, writable=True, file_okay=False), help="The output directory to use for the exported files.")
    @click.option("--recursive", "-r", is_flag=True, default=False, help="Process directories recursively.")
    @click.option("--flatten", "-f", is_flag=True, default=False, help="Flatten the output directory structure instead of preserving it when using the --recursive flag. [dim yellow](Note: files with identical filenames are silently overwritten.)[/]")
    @functools.wraps(f)
    def wrapper_common_options(*args, **kwargs):
        return f(*args, **kwargs)

    return wrapper_common_options


@cli_main.command()
@click.option('--path', type=click.Path(exists=True, dir_okay=False), required=True, help='Path to the note timing file (onset times in milliseconds).')
@common_evaluation_options
@click.option("--top", type=int, default=25, show_default=True, help="Display the N most complex notes. --top -1 to display all notes.")
def evaluate(**kwargs):
    """Evaluate the rhythm complexity of every note of a timing file and display the most complex ones."""
    try:
        with Progress(
            SpinnerColumn(),
            *Progress.get_default_columns(),
            TimeElapsedColumn(),
            console=rich_console,
            transient=True
        ) as progress:
            progress.add_task("Evaluating", total=None)
            handler = ComplexityHandler(**kwargs)

        print_header("Rhythm Complexity", handler.rhythmcomplexity.filename)
        rich_console.print(handler.build_table(kwargs["top"]))
        handler.print_summary()

    except (TimingLoadError, NotEnoughObjectsError, Exception) as e:
        print_exception(e)


@cli_main.command()
@click.option('--path', type=click.Path(exists=True), required=True, help='Path to the note timing file(s).')
@common_evaluation_options
@common_export_options
@click.option("--export-to", type=click.Choice(("STDOUT", "TXT"), case_sensitive=False), default="STDOUT", show_default=True, help="STDOUT: print the per-note scores to the terminal; TXT: write them to a <filename>.rhythm.txt file.")
def export_scores(**kwargs):
    """Export the per-note rhythm complexity of a timing file (or a directory of them) to a text file or to the terminal."""
    kwargs["to_stdout"] = kwargs["export_to"].upper() == "STDOUT"
    kwargs["to_txt"] = kwargs["export_to"].upper() == "TXT"
    kwargs.pop("export_to", "")

    run_handler(**kwargs)


@cli_main.command("coefficient")
@click.argument("interval_a", type=click.FloatRange(min=0, min_open=True))
@click.argument("interval_b", type=click.FloatRange(min=0, min_open=True))
def coefficient_cmd(interval_a, interval_b):
    """Show the rhythmic similarity coefficient between two intervals, in both directions."""
    rich_console.print(f"coefficient({interval_a:g}, {interval_b:g}) = [cyan]{coefficient(interval_a, interval_b):.6f}[/]")
    rich_console.print(f"coefficient({interval_b:g}, {interval_a:g}) = [cyan]{coefficient(interval_b, interval_a):.6f}[/]")


def run_handler(**kwargs):
    try:
        kwargs["output_dir"] = str(get_outputdir(kwargs["path"], kwargs["output_dir"]))

        if os.path.isfile(kwargs["path"]):
            with Progress(
                SpinnerColumn(),
                *Progress.get_default_columns(),
                TimeElapsedColumn(),
                console=rich_console,
                transient=True
            ) as progress:
                progress.add_task("Processing", total=None)
                export_handler = ComplexityExportHandler(**kwargs)
            export_handler.run()
        else:
            batch_handler = BatchHandler(**kwargs)
            batch_handler.run()
            print_status(f'Finished processing "{kwargs["path"]}"', "success")
    except (TimingLoadError, NotEnoughObjectsError, Exception) as e:
        print_exception(e)


def print_exception(e: Exception):
    if "PRC_DEBUG" in os.environ:
        rich_console.print_exception(suppress=[click])
    else:
        logging.error(e)


if __name__ == "__main__":
    cli_main()
