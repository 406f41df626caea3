"""Table output style.

Without pretty formatting, rows are streamed as results are found, so
columns are not padded to a common width. With pretty formatting the
whole table is rendered with rich once the scan ends, sorted and aligned.
"""

from dataclasses import dataclass
from typing import Callable, List, TextIO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .base import Style
from ...aio import EventType, PathLength
from ...core import Result


@dataclass(frozen=True)
class Column:
    header: str
    render: Callable[[Result], str]
    justify: str = 'left'


COLUMNS = (
    Column('Path', lambda result: result.path),
    Column('Length', lambda result: str(result.length), justify='right'),
    Column('Type', lambda result: 'Directory' if result.is_directory else 'File'),
)


class TableStyle(Style):
    name = 'table'

    def apply(self, engine: PathLength, output_stream: TextIO, pretty: bool = False) -> None:
        def on_check(event):
            if not pretty:
                self._write_divider(output_stream)
                self._write_row(output_stream, [column.header for column in COLUMNS])
                self._write_divider(output_stream)

        def on_result(event):
            if not pretty:
                self._write_row(output_stream, [column.render(event.result) for column in COLUMNS])

        def on_end(event):
            if pretty:
                self._render_table(output_stream, event.results)
            else:
                self._write_divider(output_stream)
            output_stream.write('\n')

        engine.subscribe(EventType.CHECK_STARTED, on_check)
        engine.subscribe(EventType.PATH_FOUND, on_result)
        engine.subscribe(EventType.SCAN_ENDED, on_end)

    def _write_divider(self, output_stream: TextIO):
        for column in COLUMNS:
            output_stream.write(f"+-{'-' * len(column.header)}-")
        output_stream.write('+\n')

    def _write_row(self, output_stream: TextIO, cells: List[str]):
        for cell in cells:
            output_stream.write(f"| {cell} ")
        output_stream.write('|\n')

    def _render_table(self, output_stream: TextIO, results: List[Result]):
        widths = [len(column.header) for column in COLUMNS]
        for result in results:
            for index, column in enumerate(COLUMNS):
                widths[index] = max(widths[index], len(column.render(result)))

        table = Table(box=box.ASCII, show_header=True, header_style=None)
        for column in COLUMNS:
            table.add_column(column.header, justify=column.justify, no_wrap=True)
        for result in results:
            table.add_row(*(Text(column.render(result)) for column in COLUMNS))

        # Wide enough that no cell is wrapped or truncated
        console = Console(
            file=output_stream,
            width=sum(widths) + 3 * len(COLUMNS) + 1,
            no_color=True,
            highlight=False,
        )
        console.print(table)
