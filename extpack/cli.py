# extpack/cli.py
from __future__ import annotations
import argparse
import logging
import sys
from functools import partial
from pathlib import Path
from typing import Any, Sequence

from extpack.build.pipeline import BuildInputs, buildAll, buildExtensionManifest, targetFromEnv
from extpack.config.providers import EnvironProvider, FileProvider
from extpack.config.resolver import EnvKey, EnvResolver
from extpack.core.errors import InputFileError, ManifestBuildError
from extpack.core.logging import configureLogging
from extpack.manifest.builder import readSigningKey
from extpack.manifest.declarations import loadDeclarations
from extpack.manifest.transform import TargetEngine
from extpack.signing import extensionIdFromKey

logger = logging.getLogger(__name__)

__all__ = ["makeParser", "main"]

EXIT_OK = 0
EXIT_MISSING_INPUT = 2



def makeParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="extpack", description="Build per-browser extension manifests.")
    parser.add_argument("--quiet", action="store_true", help="Log INFO and above only")
    parser.add_argument("--log-json", action="store_true", help="Emit console logs as one-line JSON")
    parser.add_argument("--log-file", default=None, help="Also write JSON logs to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Write manifest.json for one or all targets")
    build.add_argument(
        "--target",
        choices=[engine.value for engine in TargetEngine] + ["all"],
        default=None,
        help=f"Target browser (default: firefox when {EnvKey.FIREFOX.value} is truthy, else chrome)",
    )
    build.add_argument("--out", default="dist", help="Output directory (default: dist)")
    build.add_argument("--package", default="package.json", help="package.json holding the version")
    build.add_argument("--key", default="key.pem", help="Signing key file")
    build.add_argument("--declarations", default=None, help="JSON/JSON5 declarations replacing the built-in ones")
    build.add_argument("--env-file", default=None, help="JSON/JSON5 file of environment values, overriding the process environment")

    extId = sub.add_parser("extension-id", help="Print the extension ID derived from the signing key")
    extId.add_argument("--key", default="key.pem", help="Signing key file")
    return parser



def _makeEnv(envFile: str | None) -> EnvResolver:
    providers = []
    if envFile:
        try:
            providers.append(FileProvider(envFile, strict=True))
        except (TypeError, IsADirectoryError) as err:
            raise InputFileError(envFile, str(err)) from err
    providers.append(EnvironProvider())
    return EnvResolver(providers)



def _readDeclarations(path: Path) -> dict[str, Any]:
    try:
        return loadDeclarations(path)
    except (TypeError, ValueError) as err:
        raise InputFileError(path, str(err)) from err



def _runBuild(args: argparse.Namespace) -> int:
    env = _makeEnv(args.env_file)
    inputs = BuildInputs(
        packageJsonPath=Path(args.package),
        signingKeyPath=Path(args.key),
        env=env,
    )
    if args.declarations:
        inputs.declarations = partial(_readDeclarations, Path(args.declarations))

    if args.target == "all":
        results = buildAll(inputs, args.out)
    else:
        target = TargetEngine(args.target) if args.target else targetFromEnv(env)
        results = [buildExtensionManifest(inputs, target, args.out)]

    for result in results:
        print(result.path)
    return EXIT_OK



def _runExtensionId(args: argparse.Namespace) -> int:
    print(extensionIdFromKey(readSigningKey(args.key)))
    return EXIT_OK



def main(argv: Sequence[str] | None = None) -> int:
    args = makeParser().parse_args(argv)
    configureLogging(devMode=not args.quiet, logFile=args.log_file, jsonConsole=args.log_json)

    try:
        if args.command == "build":
            return _runBuild(args)
        return _runExtensionId(args)
    except (ManifestBuildError, FileNotFoundError) as err:
        logger.error("Build failed: %s", err)
        print(f"error: {err}", file=sys.stderr)
        return EXIT_MISSING_INPUT
