from __future__ import annotations

import logging
import os
from pathlib import Path

from rich.progress import MofNCompleteColumn, Progress, SpinnerColumn
from rich.table import Table

from pyrhythmcomplexity.console import create_results_table, format_score, rich_console
from pyrhythmcomplexity.core import RhythmComplexity
from pyrhythmcomplexity.difficulty.preprocessing import IntervalKind
from pyrhythmcomplexity.exceptions import NotEnoughObjectsError, TimingLoadError
from pyrhythmcomplexity.utils import EXPORT_SUFFIX, TIMING_FILE_SUFFIXES


class ComplexityHandler:
    def __init__(
        self,
        *,
        path: str,
        clock_rate: float = 1.0,
        interval: IntervalKind = "strain",
        **kwargs,
    ):
        self.filepath = path
        self._rhythmcomplexity = RhythmComplexity(filepath=path)
        self.in_ms = os.getenv("PRC_DISPLAY_MS") is not None
        self.clock_rate = clock_rate
        self.interval = interval

        logging.info(f'Loaded "{path}". Evaluating...')

        self.scores = self._rhythmcomplexity.evaluate(
            clock_rate=clock_rate,
            interval=interval,
        )
        self.intervals = self._rhythmcomplexity.evaluated_intervals(
            clock_rate=clock_rate,
            interval=interval,
        )

    @property
    def rhythmcomplexity(self) -> RhythmComplexity:
        """Returns the handler's RhythmComplexity instance."""
        return self._rhythmcomplexity

    def format_time(self, ms: float) -> float | str:
        return ms if self.in_ms else self.rhythmcomplexity.ms_to_ftime(ms)

    def ranked_indices(self, show_top: int = 25) -> list[int]:
        """Note indices ordered by descending score, limited to show_top (-1 for all)."""
        order = sorted(range(len(self.scores)), key=lambda i: self.scores[i], reverse=True)
        if show_top < 0 or show_top >= len(order):
            return order
        return order[:show_top]

    def build_table(self, show_top: int = 25) -> Table:
        """Build a Rich table of the most complex notes."""
        indices = self.ranked_indices(show_top)
        total = len(self.scores)

        table = create_results_table(
            title=f'Rhythm complexity of "{self.rhythmcomplexity.filename}"\n({len(indices)}/{total} displayed)',
            columns=[
                ("Note", "cyan", "right"),
                ("Onset", "magenta", "left"),
                ("Interval", "white", "right"),
                ("Complexity", "", "right"),
            ],
            caption=f"clock rate {self.clock_rate:g}, {self.interval} intervals",
        )

        for idx in indices:
            table.add_row(
                str(idx + 1),
                str(self.format_time(self.rhythmcomplexity.onset_of(idx))),
                f"{self.intervals[idx]:g}",
                format_score(float(self.scores[idx])),
            )
        return table

    def print_summary(self) -> None:
        summary = self.rhythmcomplexity.summary(self.scores)
        peak_onset = self.format_time(self.rhythmcomplexity.onset_of(summary.peak_index))
        rich_console.print(
            f"Notes: [cyan]{summary.count}[/] | "
            f"Peak: [red]{summary.peak:.4f}[/] at [green]{peak_onset}[/] | "
            f"Mean: [yellow]{summary.mean:.4f}[/]"
        )


class ComplexityExportHandler(ComplexityHandler):
    def __init__(
        self,
        *,
        path: str,
        output_dir: str,
        clock_rate: float = 1.0,
        interval: IntervalKind = "strain",
        to_txt: bool = False,
        to_stdout: bool = False,
        batch_mode: bool = False,
        **kwargs,
    ):
        super().__init__(
            path=path,
            clock_rate=clock_rate,
            interval=interval,
            **kwargs,
        )
        self.output_directory = output_dir
        self.to_txt = to_txt
        self.to_stdout = to_stdout
        self.batch_mode = batch_mode
        self._is_autocreated_outdir = False

    def run(self):
        if self.to_stdout:
            self.stdout_export_runner()

        try:
            if self.to_txt and not os.path.exists(self.output_directory):
                os.makedirs(self.output_directory)
                self._is_autocreated_outdir = True

            if self.to_txt:
                self.txt_export_runner()
        finally:
            if (
                self._is_autocreated_outdir
                and os.path.exists(self.output_directory)
                and len(os.listdir(self.output_directory)) == 0
            ):
                os.rmdir(self.output_directory)

    def stdout_export_runner(self):
        lines = [
            f"{self.rhythmcomplexity.onset_of(idx):g} {score:.6f}\n"
            for idx, score in enumerate(self.scores)
        ]
        rich_console.out(
            f'Rhythm complexity for "{self.rhythmcomplexity.filename}":\n',
            *lines,
            sep="",
            end="",
        )

    def txt_export_runner(self):
        out_path = self.rhythmcomplexity.export_txt(
            self.scores, output_dir=self.output_directory
        )
        message = f'Successfully exported "{self.rhythmcomplexity.filename}" rhythm complexity to "{out_path}"'
        if self.batch_mode:
            logging.info(message)
        else:
            rich_console.print(message)


class BatchHandler:
    """Scores every timing file of a directory, skipping the ones that fail to load."""

    def __init__(
        self,
        *,
        path: str,
        output_dir: str,
        recursive: bool = False,
        flatten: bool = False,
        **kwargs,
    ):
        self.directory_path = os.path.abspath(path)
        self.output_directory = os.path.abspath(output_dir)
        self.recursive = recursive
        self.flatten = flatten
        self.kwargs = kwargs

    def timing_files(self) -> list[str]:
        pattern = "**/*" if self.recursive else "*"
        return sorted(
            str(p)
            for p in Path(self.directory_path).glob(pattern)
            if p.is_file() and is_timing_file(p.name)
        )

    def output_dir_for(self, file_path: str) -> str:
        if self.flatten:
            return self.output_directory
        relative_dir = os.path.relpath(os.path.dirname(file_path), self.directory_path)
        return os.path.normpath(os.path.join(self.output_directory, relative_dir))

    def run(self) -> int:
        files = self.timing_files()
        if not files:
            raise FileNotFoundError(f'No timing files found in "{self.directory_path}"')

        scored = 0
        with Progress(
            SpinnerColumn(),
            *Progress.get_default_columns(),
            MofNCompleteColumn(),
            console=rich_console,
            transient=True,
        ) as progress:
            task = progress.add_task("Scoring...", total=len(files))
            for file_path in files:
                scored += self.score_file(file_path)
                progress.advance(task)

        logging.info(f"Scored {scored}/{len(files)} timing files")
        return scored

    def score_file(self, file_path: str) -> bool:
        try:
            ComplexityExportHandler(
                **self.kwargs,
                path=file_path,
                output_dir=self.output_dir_for(file_path),
                batch_mode=True,
            ).run()
        except (TimingLoadError, NotEnoughObjectsError) as e:
            logging.error(f'Skipped "{os.path.relpath(file_path, self.directory_path)}": {e}')
            return False
        return True


def is_timing_file(filename: str) -> bool:
    """Onset files are .txt or .csv; score exports (.rhythm.txt) are not."""
    name = filename.lower()
    return name.endswith(TIMING_FILE_SUFFIXES) and not name.endswith(EXPORT_SUFFIX)
