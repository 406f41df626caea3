"""JSON output style.

Writes a JSON array of result objects, streaming each result as it is
found. Pretty mode puts every result on its own indented lines.
"""

import json
from typing import TextIO

from .base import Style
from ...aio import EventType, PathLength


class JsonStyle(Style):
    name = 'json'

    def apply(self, engine: PathLength, output_stream: TextIO, pretty: bool = False) -> None:
        count = 0

        def on_check(event):
            nonlocal count
            count = 0
            output_stream.write('[')

        def on_result(event):
            nonlocal count
            if count:
                output_stream.write(',')
            if pretty:
                output_stream.write('\n')

            count += 1

            data = event.result.to_dict()
            if pretty:
                text = json.dumps(data, indent=2, ensure_ascii=False)
                output_stream.write('  ' + text.replace('\n', '\n  '))
            else:
                output_stream.write(json.dumps(data, separators=(',', ':'), ensure_ascii=False))

        def on_end(event):
            if count and pretty:
                output_stream.write('\n')
            output_stream.write(']\n')

        engine.subscribe(EventType.CHECK_STARTED, on_check)
        engine.subscribe(EventType.PATH_FOUND, on_result)
        engine.subscribe(EventType.SCAN_ENDED, on_end)
