"""Line-oriented terminal input."""

import logging
import sys
from typing import Optional, TextIO

logger = logging.getLogger(__name__)


class InputStreamError(Exception):
    """Reading the next line of input failed; the session cannot continue."""


class ConsoleInput:
    """Reads prompted lines from a text stream and owns its lifetime."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        output: Optional[TextIO] = None,
        owns_stream: bool = False
    ):
        """
        Initialize console input.

        Args:
            stream: Stream to read from (default: stdin)
            output: Stream prompts are written to (default: stdout)
            owns_stream: Close `stream` itself on close()
        """
        self.stream = stream if stream is not None else sys.stdin
        self.output = output if output is not None else sys.stdout
        self.owns_stream = owns_stream
        self.closed = False

    def read_line(self, prompt: str) -> str:
        """
        Prompt and read one line, without its line terminator.

        Raises:
            InputStreamError: On end of input, interrupt, or a read error
        """
        if self.closed:
            raise InputStreamError("input is closed")

        try:
            self.output.write(prompt)
            self.output.flush()
            line = self.stream.readline()
        except KeyboardInterrupt:
            raise InputStreamError("interrupted")
        except (OSError, ValueError) as e:
            raise InputStreamError(str(e)) from e

        if line == "":
            raise InputStreamError("end of input")
        return line.rstrip("\r\n")

    def close(self):
        """Release the input. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        if self.owns_stream:
            self.stream.close()
        logger.debug("Console input closed")
