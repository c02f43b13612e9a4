#!/usr/bin/env python3
"""
ifdefpp - //@ifdef conditional-compilation preprocessor

Preprocesses every file of an input directory into an output directory,
keeping or dropping the lines guarded by //@ifdef NAME, //@ifndef NAME and
//@endif according to a set of definitions.

As with the rest of this codebase, the ChRIS "plugin" pattern is used as a
general purpose python app framework: the app receives an input and an output
directory plus its own options.

Usage:
    ifdefpp inputdir/ outputdir/ -D NAME[=VALUE] ...

Examples:
    # Build with DEBUG enabled
    ifdefpp src/ build/ -D DEBUG

    # Definitions from a YAML mapping, overridden on the command line
    ifdefpp src/ build/ --definesFile flags.yaml -D LEGACY=off

    # Only JavaScript files, trace every directive
    ifdefpp src/ build/ --pattern '**/*.js' -D DEBUG -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    preprocess,
    define_parse,
    definitions_load,
    PreprocessorError,
    DefinitionsError,
    __version__,
    LOG,
    state_connectToLogger,
)
from .models import ProgramState, pipeline


parser = ArgumentParser(
    description="ifdefpp - keep or drop //@ifdef blocks according to a set of definitions",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "-D",
    "--define",
    action="append",
    default=None,
    metavar="NAME[=VALUE]",
    help="Define a variable (repeatable). VALUE of 0/false/no/off/empty undefines it",
)

parser.add_argument(
    "--definesFile",
    default=None,
    type=str,
    help="YAML file with a mapping of variable names to values (applied before -D)",
)

parser.add_argument(
    "--pattern",
    default=appsettings.file_pattern,
    type=str,
    help="Glob selecting input files, relative to inputdir",
)

parser.add_argument(
    "--lenientEndif",
    action="store_true",
    default=not appsettings.strict_endif,
    help="Ignore an @endif with no open block instead of failing",
)

parser.add_argument(
    "--failFast",
    action="store_true",
    default=appsettings.fail_fast,
    help="Stop at the first file that fails to preprocess",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and collect input files.

    Returns:
        ProgramState with added fields:
            - inputFiles: Sorted regular files under inputdir matching pattern
            - envOK: True if environment is valid

    Exits:
        1 if inputdir does not exist or no file matches the pattern
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputFiles = sorted(p for p in state.inputdir.glob(state.pattern) if p.is_file())
    if not state.inputFiles:
        print(
            f"Error: No files matching '{state.pattern}' in {state.inputdir}", file=sys.stderr
        )
        state.envOK = False
        sys.exit(1)
    LOG(f"Found {len(state.inputFiles)} input file(s)", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def definitions_resolve(inputstate: ProgramState) -> ProgramState:
    """
    Build the definitions mapping.

    The definitions file (if any) is applied first, then each -D flag in
    command line order, so later flags win.

    Returns:
        ProgramState with added field:
            - definitions: Dict[str, bool]

    Exits:
        1 if the definitions file or a -D flag is invalid
    """
    state = inputstate.copy()
    definitions = {}

    try:
        if state.definesFile:
            definitions.update(definitions_load(state.definesFile))
            LOG(f"Loaded {len(definitions)} definition(s) from {state.definesFile}", level=2)
        for text in state.define:
            name, value = define_parse(text)
            definitions[name] = value
    except DefinitionsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    enabled = sorted(name for name, value in definitions.items() if value)
    LOG(f"Defined: {', '.join(enabled) if enabled else '(none)'}", level=2)

    state.definitions = definitions
    return state


def file_preprocess(inputFile: Path, state: ProgramState) -> Path:
    """
    Preprocess one input file into the output directory.

    Returns:
        Path of the written output file

    Raises:
        PreprocessorError, OSError, UnicodeError
    """
    relative = inputFile.relative_to(state.inputdir)
    # newline="" keeps the line endings exactly as they are on disk
    with open(inputFile, "r", encoding=appsettings.encoding, newline="") as f:
        source = f.read()
    LOG(f"Preprocessing {relative} ({len(source)} characters)", level=2)

    result = preprocess(source, state.definitions, strict_endif=not state.lenientEndif)

    outputFile = state.outputdir / relative
    outputFile.parent.mkdir(parents=True, exist_ok=True)
    with open(outputFile, "w", encoding=appsettings.encoding, newline="") as f:
        f.write(result)
    return outputFile


def files_preprocess(inputstate: ProgramState) -> ProgramState:
    """
    Preprocess every input file.

    Failures are recorded per file instead of aborting the run, unless
    failFast is set.

    Returns:
        ProgramState with added fields:
            - processedFiles: Output files written
            - failedFiles: Relative input path -> error message
    """
    state = inputstate.copy()
    state.processedFiles = []
    state.failedFiles = {}

    LOG(f"Preprocessing {len(state.inputFiles)} file(s)...", level=1)

    for inputFile in state.inputFiles:
        relative = str(inputFile.relative_to(state.inputdir))
        try:
            state.processedFiles.append(file_preprocess(inputFile, state))
        except (PreprocessorError, OSError, UnicodeError) as e:
            state.failedFiles[relative] = str(e)
            print(f"Error: {relative}: {e}", file=sys.stderr)
            if state.failFast:
                break

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Summarise the run.

    Exits:
        1 if any file failed
    """
    state: ProgramState = inputstate.copy()

    LOG(f"Wrote {len(state.processedFiles)} file(s) to {state.outputdir}", level=1)
    if state.failedFiles:
        LOG(f"{len(state.failedFiles)} file(s) failed", level=1)
        sys.exit(1)
    return state


@chris_plugin(
    parser=parser,
    title="ifdefpp - //@ifdef conditional-compilation preprocessor",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - preprocess inputdir into outputdir.

    Orchestrates the pipeline:
        1. env_check: Validate paths and collect input files
        2. definitions_resolve: Merge definitions file and -D flags
        3. files_preprocess: Preprocess and write each file
        4. results_report: Summarise, exit 1 on failures

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, definitions_resolve, files_preprocess, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
