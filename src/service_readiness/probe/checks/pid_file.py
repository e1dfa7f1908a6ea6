"""Pid file check: does the pid file name a live process?"""

import os

from service_readiness.probe.base import TargetCheck
from service_readiness.probe.models import CheckObservation, PidFileTarget


class PidFileCheck(TargetCheck):
    """Equivalent of ``test -f $PIDFILE && kill -0 $(cat $PIDFILE)``."""

    def __init__(self, target: PidFileTarget, name: str | None = None):
        super().__init__(name or f"pid_file_{target.path.name}")
        self.target = target

    def describe(self) -> str:
        return self.target.describe()

    def _execute(self, timeout: float) -> CheckObservation:
        path = self.target.path
        details: dict = {"path": str(path)}

        try:
            # Undecodable bytes fall through to the "holds no pid" branch below
            content = path.read_bytes().decode("utf-8", errors="replace").strip()
        except FileNotFoundError:
            return self.failed("pid file missing", details)
        except OSError as e:
            return self.failed(f"pid file unreadable: {e}", {**details, "error": str(e)})

        try:
            pid = int(content)
        except ValueError:
            return self.failed(f"pid file holds no pid: {content[:32]!r}", details)

        details["pid"] = pid
        if pid <= 0:
            return self.failed(f"invalid pid {pid}", details)

        try:
            os.kill(pid, 0)
        except OverflowError:
            # Larger than the platform pid_t
            return self.failed(f"invalid pid {pid}", details)
        except ProcessLookupError:
            return self.failed(f"process {pid} not running", details)
        except PermissionError:
            # Exists, but owned by another user
            return self.success(f"process {pid} running", details)
        except OSError as e:
            return self.failed(f"cannot signal process {pid}: {e}", {**details, "error": str(e)})

        return self.success(f"process {pid} running", details)
