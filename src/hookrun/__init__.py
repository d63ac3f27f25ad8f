"""
hookrun - Administrative hook script runner

Runs prolog/epilog style hook scripts matched by a glob pattern, with
per-script timeouts and whole-process-group termination.
"""

__version__ = "0.1.0"

# Re-export the primary entry point for convenience
from hookrun.core.scripts import RunReport, ScriptRunner, run_script

__all__ = ["RunReport", "ScriptRunner", "run_script", "__version__"]
