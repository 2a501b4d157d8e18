"""Argument parsing functionality for conanbump."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="conanbump",
        description=(
            "conanbump - keep conandata.yml and conan.win.lock in sync with a Conan registry"
        ),
        add_help=True,
    )

    parser.add_argument("PACKAGE",
                        help="Name of the Conan package to update (e.g. zterm)",
                        type=str)
    parser.add_argument("REMOTE",
                        help="Conan remote repository name (default: from config or 'repo')",
                        nargs="?",
                        type=str)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to a YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("-crbu", "--conan-remote-base-url",
                        dest="REMOTE_BASE_URL",
                        help="Base URL of the Conan registry (Artifactory)",
                        action="store",
                        type=str)
    parser.add_argument("-crr", "--conan-remote-repo",
                        dest="REMOTE_REPO",
                        help="Conan remote repository name",
                        action="store",
                        type=str)
    parser.add_argument("-C", "--directory",
                        dest="DIRECTORY",
                        help="Working directory holding the manifest and lock files",
                        action="store",
                        type=str,
                        default=".")
    parser.add_argument("--manifest",
                        dest="MANIFEST",
                        help="Manifest file name (default: conandata.yml)",
                        action="store",
                        type=str)
    parser.add_argument("--lock",
                        dest="LOCK",
                        help="Lock file name (default: conan.win.lock)",
                        action="store",
                        type=str)
    parser.add_argument("--version",
                        dest="PIN_VERSION",
                        help="Update to this exact version instead of the latest",
                        action="store",
                        type=str)
    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Report the update without writing any file",
                        action="store_true")
    parser.add_argument("--stage",
                        dest="STAGE",
                        help="Run 'git add' on both files after a successful update",
                        action="store_true")
    parser.add_argument("--list-versions",
                        dest="LIST_VERSIONS",
                        help="Print the available versions, newest first, and exit",
                        action="store_true")
    parser.add_argument("--json",
                        dest="JSON",
                        help="Print the resolved package info as JSON",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
