"""CLI context management for the server session and shared state."""

import logging
import sys
from dataclasses import dataclass, field

from mockforge import CapturingReporter, MockServer, build_server, load_schema_file


@dataclass
class CLIContext:
    """Shared context for CLI commands.

    Each CLI invocation is one server session: the schema file is loaded
    lazily, records live until the command returns.
    """

    schema_path: str
    json_output: bool
    verbose: bool = False
    reporter: CapturingReporter = field(default_factory=CapturingReporter)
    _server: MockServer | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.verbose:
            logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    def get_server(self) -> MockServer:
        """Get or create the server (lazy initialization).

        Returns:
            MockServer built from the schema file
        """
        if self._server is None:
            self._server = build_server(load_schema_file(self.schema_path), self.reporter)
        return self._server

    def close(self) -> None:
        """Shut the session down if one was started."""
        if self._server is not None:
            self._server.shutdown()
            self._server = None
