from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResolvedPaths:
    """Absolute paths derived from the installed app bundle.

    Attributes:
        exec_path: The running app executable, used as the worker's program
        resources_dir: The bundle's Resources directory
        worker_entry: Worker entry point passed as the program's only argument
        bin_dir: Directory of auxiliary binaries the worker shells out to
        plist_path: Canonical install location of the launch agent plist
        stdout_path: Log file receiving the worker's stdout
        stderr_path: Log file receiving the worker's stderr
    """

    exec_path: str
    resources_dir: str
    worker_entry: str
    bin_dir: str
    plist_path: str
    stdout_path: str
    stderr_path: str


@dataclass
class ServiceDescriptor:
    """Declarative description of the launch agent handed to launchd.

    Attributes:
        label: Unique identifier for the launch agent (e.g., 'com.m24.tools.indexer')
        program_path: Path to the executable
        program_arguments: Arguments appended after the executable
        environment_variables: Environment injected into the worker process
        run_at_load: Whether launchd starts the program as soon as it is loaded
        keep_alive: Whether launchd relaunches the program after it exits
        stdout_path: Path for stdout log file
        stderr_path: Path for stderr log file
        process_type: launchd scheduling class for the process
    """

    label: str
    program_path: str
    program_arguments: list[str] = field(default_factory=list)
    environment_variables: dict[str, str] = field(default_factory=dict)
    run_at_load: bool = True
    keep_alive: bool = True
    stdout_path: str | None = None
    stderr_path: str | None = None
    process_type: str | None = None
