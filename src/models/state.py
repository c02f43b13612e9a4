"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern used by
the command line, and the pipeline() helper for composing stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the command line pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, define, definesFile,
          pattern, lenientEndif, failFast
        - env_check: inputFiles, envOK
        - definitions_resolve: definitions
        - files_preprocess: processedFiles, failedFiles
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing source files
        outputdir: Directory receiving preprocessed files
        verbosity: Logging verbosity level (1-3)
        define: Raw -D NAME[=VALUE] arguments, in command line order
        definesFile: Optional YAML definitions file
        pattern: Glob selecting input files, relative to inputdir
        lenientEndif: Ignore unmatched @endif instead of failing
        failFast: Stop at the first failing file
        envOK: Environment validation passed
        inputFiles: Resolved input files, sorted
        definitions: Merged definitions mapping
        processedFiles: Output files written
        failedFiles: Input file (relative path) -> error message
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    define: List[str] = field(default_factory=list)
    definesFile: Optional[str] = field(default=None)
    pattern: str = field(default="**/*")
    lenientEndif: bool = field(default=False)
    failFast: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputFiles: List[Path] = field(default_factory=list)
    definitions: Dict[str, Any] = field(default_factory=dict)
    processedFiles: List[Path] = field(default_factory=list)
    failedFiles: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Options that are not ProgramState fields are ignored.
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        filtered_options = {
            k: v for k, v in options_dict.items() if k in valid_fields and v is not None
        }

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            definitions_resolve,
            files_preprocess,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
