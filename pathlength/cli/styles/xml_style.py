"""XML output style."""

from html import escape
from typing import TextIO

from .base import Style
from ...aio import EventType, PathLength

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" ?>'


class XmlStyle(Style):
    """Writes a <results> document with one empty <result> element per path."""

    name = 'xml'

    def apply(self, engine: PathLength, output_stream: TextIO, pretty: bool = False) -> None:
        count = 0

        def on_check(event):
            nonlocal count
            count = 0
            output_stream.write(XML_DECLARATION)
            if pretty:
                output_stream.write('\n')
            output_stream.write('<results>')

        def on_result(event):
            nonlocal count
            if pretty:
                output_stream.write('\n  ')

            count += 1

            directory = 'true' if event.is_directory else 'false'
            output_stream.write(
                f'<result directory="{directory}" length="{event.length}" path="{escape(event.path)}" />'
            )

        def on_end(event):
            if pretty and count:
                output_stream.write('\n')
            output_stream.write('</results>\n')

        engine.subscribe(EventType.CHECK_STARTED, on_check)
        engine.subscribe(EventType.PATH_FOUND, on_result)
        engine.subscribe(EventType.SCAN_ENDED, on_end)
