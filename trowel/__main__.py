"""
Program entry: `trowel <command> [options]` or `python -m trowel ...`.

Commands are loaded from the TROWEL_PATH directories (./commands by default).
Errors are reported through trigger(); set TROWEL_DEBUG=1 for tracebacks and
debug logging.
"""
import logging
import sys

from rich.logging import RichHandler

from .faults import *
from .runner import Runner
from .utils import *

logger = logging.getLogger(__name__)


def main(argv=Unset, /):
    if debugging():
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True)],
        )

    runner = Runner()
    try:
        loaded = runner.load()
        logger.debug("loaded %d command files", len(loaded))
        runner.run(argv)
    except TrowelError as fault:
        trigger(fault)
    except Exception as error:
        fault = DelegatedCommandError(str(error) or type(error).__name__)
        fault.__cause__ = error
        trigger(fault)
    return 0


if __name__ == "__main__":
    sys.exit(main())
