"""YAML output style.

Each result is written as soon as it is found, as a one-item YAML
sequence, so the concatenated output forms a single sequence.
"""

from typing import TextIO

import yaml

from .base import Style
from ...aio import EventType, PathLength


class YamlStyle(Style):
    name = 'yaml'

    def apply(self, engine: PathLength, output_stream: TextIO, pretty: bool = False) -> None:
        def on_result(event):
            output_stream.write(yaml.safe_dump(
                [event.result.to_dict()],
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
                width=float('inf'),
            ))

        def on_end(event):
            output_stream.write('\n')

        engine.subscribe(EventType.PATH_FOUND, on_result)
        engine.subscribe(EventType.SCAN_ENDED, on_end)
