# -*- coding: utf-8 -*-
"""
ChessBot console entrypoint
  - config:     LinkConfig (env overridable)
  - board_link: BoardLink (serial framing)
  - rules:      Game (python-chess)
  - translator: MoveTranslator
  - console:    Console (interactive loop)
"""
import logging
import os
import sys

from .board_link import BoardLink
from .config import LinkConfig
from .console import Console
from .errors import ChannelError
from .rules import Game
from .translator import MoveTranslator

log = logging.getLogger("chessbot")


def setup_logging() -> None:
    level = (os.environ.get("CHESSBOT_LOG_LEVEL") or "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main() -> int:
    setup_logging()
    try:
        cfg = LinkConfig.from_env()
        # pyserial rejects bad settings (e.g. baud rate) with ValueError.
        link = BoardLink.open(cfg)
    except ValueError as e:
        log.error("Bad configuration: %s", e)
        return 2
    except ChannelError as e:
        log.error("%s", e)
        return 1

    with link:
        console = Console(Game(), MoveTranslator(link))
        try:
            console.run()
        except ChannelError as e:
            log.error("Lost the board: %s", e)
            return 1
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
