"""ChessBot board-side package.

Turns moves typed at the console into framed serial commands for the
board's microcontroller. The console entrypoint lives in chessbot.main.
"""
