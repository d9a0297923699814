#!/usr/bin/env python3
"""
run.py - Main entry point for networked Connect Four
"""

import argparse
import sys

from connectfour.config import DEFAULT_HOST, GameConfig, ServerConfig
from connectfour.debug import DebugManager, DebugLevel
from connectfour.exceptions import ConnectFourException

# --- Utility Functions ---

def configure_debug(args) -> DebugManager:
    """Build the logging collaborator from args.debug / args.debug_level / args.log_file."""
    manager = DebugManager("connectfour")
    if args.debug:
        manager.configure(level=DebugLevel.DEBUG)
    else:
        manager.set_from_string(args.debug_level)
    if getattr(args, 'log_file', None):
        manager.configure(log_file=args.log_file)
    return manager

def build_game_config(args) -> GameConfig:
    """Board options shared by the server and client commands."""
    return GameConfig(rows=args.rows, cols=args.cols, win_len=args.win_len)

def build_server_config(args) -> ServerConfig:
    """Turn parsed server arguments into a ServerConfig."""
    return ServerConfig(port=args.port, host=args.host, read_timeout=args.timeout,
                        max_games=args.games, game=build_game_config(args))

# --- Command Handlers ---

def handle_server(args, parser) -> int:
    """Handle the 'server' command."""
    from connectfour.server.server import ConnectFourServer
    
    try:
        config = build_server_config(args)
    except ValueError as e:
        parser.error(str(e))
    
    debug = configure_debug(args)
    try:
        server = ConnectFourServer(config, debug=debug)
    except OSError as e:
        print(f"Could not listen on {config.host}:{config.port}: {e}", file=sys.stderr)
        return 1
    
    try:
        results = server.serve()
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0
    finally:
        server.close()
    
    for number, status in enumerate(results, 1):
        print(f"Game {number}: {status}")
    return 0

def handle_client(args, parser) -> int:
    """Handle the 'client' command."""
    from connectfour.client.board import ClientBoard
    from connectfour.client.network import NetworkClient
    from connectfour.interfaces.ptui import ConnectFourPTUI
    
    try:
        game = build_game_config(args)
    except ValueError as e:
        parser.error(str(e))
    
    debug = configure_debug(args)
    try:
        client = NetworkClient(args.host, args.port, timeout=args.timeout, debug=debug)
    except ConnectFourException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    ui = ConnectFourPTUI(client, board=ClientBoard(game))
    try:
        ui.run()
    except KeyboardInterrupt:
        client.close()
        print("\nQuitting game.")
    return 0

# --- Main Entry Point ---

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Networked Connect Four',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Start a server on port 5555 and keep pairing players
    python run.py server 5555

    # Run exactly one game, dropping players that stay silent for 60 seconds
    python run.py server 5555 --games 1 --timeout 60

    # Play a bigger board with lines of five
    python run.py server 5555 --rows 8 --cols 9 --win-len 5

    # Join a game from another terminal
    python run.py client localhost 5555

    # Join the bigger game; board options must match the server's
    python run.py client localhost 5555 --rows 8 --cols 9 --win-len 5

    # Trace every protocol line
    python run.py server 5555 --debug_level trace
    """
    )

    subparsers = parser.add_subparsers(dest='component', help='Component to run')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--debug', 
        action='store_true', 
        help='Enable debug mode (equivalent to --debug_level debug)')
    common.add_argument('--debug_level', 
        choices=[level.name.lower() for level in DebugLevel],
        default='info', 
        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
    common.add_argument('--log-file', 
        type=str, 
        help='Also write log messages to this file')

    # Client and server must agree on these
    board_options = argparse.ArgumentParser(add_help=False)
    board_group = board_options.add_argument_group('Board options')
    board_group.add_argument('--rows', type=int, default=GameConfig.rows, help='Board rows (default: 6)')
    board_group.add_argument('--cols', type=int, default=GameConfig.cols, help='Board columns (default: 7)')
    board_group.add_argument('--win-len', type=int, default=GameConfig.win_len,
        help='Pieces in a line needed to win (default: 4)')

    server_parser = subparsers.add_parser('server', 
        parents=[common, board_options],
        help='Run the game server',
        description='Accept players in pairs and run a game for each pair')
    server_parser.add_argument('port', 
        type=int, 
        help='Port to listen on')
    server_parser.add_argument('--host', 
        default=DEFAULT_HOST, 
        help=f'Address to bind (default: {DEFAULT_HOST})')
    server_parser.add_argument('--timeout', 
        type=float, 
        default=None,
        help='Seconds to wait for a player move before ending the game (default: wait forever)')
    server_parser.add_argument('--games', 
        type=int, 
        default=None,
        help='Stop after this many games (default: serve forever)')

    client_parser = subparsers.add_parser('client', 
        parents=[common, board_options],
        help='Join a game as a player',
        description='Connect to a server and play from the terminal')
    client_parser.add_argument('host', help='Server host name or address')
    client_parser.add_argument('port', type=int, help='Server port')
    client_parser.add_argument('--timeout', 
        type=float, 
        default=None,
        help='Seconds to wait while connecting (default: no limit)')
    
    return parser

def main(argv=None) -> int:
    """Main entry point for networked Connect Four."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.component == 'server':
        return handle_server(args, parser)
    elif args.component == 'client':
        return handle_client(args, parser)
    parser.print_help()
    return 2

if __name__ == "__main__":
    sys.exit(main())
