"""
Allow running the package with: python -m simscan

By default, runs the CLI. Use 'serve' to start the JSON API server.

Examples:
    python -m simscan /path/to/photos         # CLI scan
    python -m simscan cli /path/to/photos     # CLI scan (explicit)
    python -m simscan serve --port 5000       # API server
    python -m simscan config --init           # Create example config file
"""

import sys


def _show_config(argv) -> int:
    from .user_config import get_user_config

    config = get_user_config()

    if '--init' in argv or '-i' in argv:
        if config.create_example_config():
            print("Created example configuration file at:")
            print(f"  {config.config_file_path}")
            print("\nEdit this file to customize scan defaults.")
            return 0
        print("Failed to create configuration file.")
        return 1

    print(f"Configuration file: {config.config_file_path}")
    if config.config_file_path.exists():
        print("Status: found")
    else:
        print("Status: not found (using defaults)")
        print("\nRun 'python -m simscan config --init' to create one.")

    print("\nCurrent settings:")
    for key, value in config.as_dict().items():
        print(f"  {key}: {value}")
    return 0


def main():
    argv = sys.argv[1:]
    command = argv[0] if argv else None

    if command == 'serve':
        from .app import main as serve_main
        serve_main(argv[1:])
    elif command == 'config':
        sys.exit(_show_config(argv[1:]))
    else:
        if command == 'cli':
            argv = argv[1:]
        from .cli import main as cli_main
        sys.exit(cli_main(argv))


if __name__ == '__main__':
    main()
