"""conanbump - keep conandata.yml and conan.win.lock in sync with a Conan registry.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from constants import Constants, ExitCodes
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import cli_overrides_from_args, load_config
from editors.base import MissingFilesError
from editors.conandata import ConanDataEditor
from editors.conanlock import ConanLockEditor
from registry.conan.client import ConanRegistryClient
from updater.git_stage import GitStageError, stage_files
from updater.reconciler import PackageReconciler, ReconcileOutcome
from versioning.grammar import MalformedReferenceError
from versioning.resolvers.conan import VersionNotFoundError
from versioning.service import ConanPackageService

logger = logging.getLogger(__name__)


def setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def build_reconciler(base_url: str, directory: str, manifest: str, lock: str) -> PackageReconciler:
    """Wire the registry client, resolvers, and editors together."""
    client = ConanRegistryClient(base_url)
    return PackageReconciler(
        ConanPackageService(client),
        ConanDataEditor(directory, manifest),
        ConanLockEditor(directory, lock),
    )


def list_versions(reconciler: PackageReconciler, remote: str, package_name: str) -> int:
    versions = reconciler.package_service.version_resolver.get_package_versions(remote, package_name)
    if not versions:
        logger.warning("No versions found for %s in %s", package_name, remote)
        return ExitCodes.RESOLUTION_ERROR.value
    for v in versions:
        print(v.version)
    return ExitCodes.SUCCESS.value


def run(args) -> int:
    """Run one package update from parsed arguments and return the exit code."""
    config = load_config(
        cli_overrides_from_args(args),
        working_directory=args.DIRECTORY,
        config_path=getattr(args, "CONFIG", None),
    )
    base_url = config.get("conan.remote_base_url")
    if not base_url:
        logger.error(
            "Conan remote base URL is not configured. Set %s, use --conan-remote-base-url, "
            "or add conan.remote_base_url to a config file.",
            Constants.ENV_REMOTE_BASE_URL,
        )
        return ExitCodes.CONFIG_ERROR.value
    remote = config.get("conan.remote_repo", Constants.DEFAULT_REMOTE)
    package_name = args.PACKAGE

    if is_debug_enabled(logger):
        logger.debug(
            "Resolved configuration",
            extra=extra_context(
                event="config",
                component="cli",
                action="load_config",
                remote=remote,
                sources=dict(config.sources),
            ),
        )
    logger.info("Package: %s, remote: %s, directory: %s", package_name, remote, os.path.abspath(args.DIRECTORY))

    reconciler = build_reconciler(
        base_url,
        args.DIRECTORY,
        config.get("files.manifest", Constants.MANIFEST_FILE),
        config.get("files.lock", Constants.LOCK_FILE),
    )

    if getattr(args, "LIST_VERSIONS", False):
        return list_versions(reconciler, remote, package_name)

    try:
        info = reconciler.reconcile(
            remote,
            package_name,
            version=getattr(args, "PIN_VERSION", None),
            dry_run=getattr(args, "DRY_RUN", False),
        )
    except MissingFilesError as exc:
        logger.error("%s", exc)
        return ExitCodes.FILE_ERROR.value
    except (VersionNotFoundError, MalformedReferenceError) as exc:
        logger.error("%s", exc)
        return ExitCodes.RESOLUTION_ERROR.value
    except UnicodeDecodeError as exc:
        logger.error("Package files are not valid UTF-8: %s", exc)
        return ExitCodes.FILE_ERROR.value
    except OSError as exc:
        logger.error("Failed to read or write package files: %s", exc)
        return ExitCodes.FILE_ERROR.value

    if reconciler.last_outcome is ReconcileOutcome.UNRESOLVED:
        logger.error("Could not resolve %s from remote %s", package_name, remote)
        return ExitCodes.RESOLUTION_ERROR.value
    if reconciler.last_outcome is ReconcileOutcome.UNTRACKED:
        logger.info("Package %s is not tracked in the package files. Nothing to do.", package_name)
        return ExitCodes.SUCCESS.value
    if info is None:
        logger.info("Package %s is already up to date. Nothing to do.", package_name)
        return ExitCodes.SUCCESS.value

    if getattr(args, "JSON", False):
        print(json.dumps(info.to_dict(), indent=2))
    else:
        print(info.lock_entry)

    if getattr(args, "STAGE", False) and not getattr(args, "DRY_RUN", False):
        try:
            stage_files(
                [reconciler.manifest.file_name, reconciler.lock.file_name],
                cwd=args.DIRECTORY,
            )
        except (GitStageError, OSError) as exc:
            logger.error("Failed to stage files: %s", exc)
            return ExitCodes.FILE_ERROR.value
    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    args = parse_args()
    setup_logging(args)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
