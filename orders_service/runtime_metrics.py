"""
Runtime introspection for the running interpreter process.
Snapshots of memory, threads, garbage collection, interpreter and OS facts,
served read-only by the /runtime endpoints.
"""
import gc
import os
import platform
import sys
import threading
import time
from dataclasses import asdict, dataclass, field
from typing import List, Optional

import psutil


@dataclass
class MemoryInfo:
    rss: int
    vms: int
    system_total: int
    system_available: int
    system_percent: float
    utilization_ratio: float


@dataclass
class RuntimeInfo:
    uptime_seconds: float
    start_time: float
    pid: int
    implementation: str
    python_version: str
    compiler: str
    executable: str


@dataclass
class ThreadInfo:
    thread_count: int
    peak_thread_count: int
    daemon_thread_count: int
    native_thread_count: int


@dataclass
class OperatingSystemInfo:
    name: str
    release: str
    version: str
    arch: str
    available_processors: int
    load_average: Optional[List[float]] = None


@dataclass
class GarbageCollectorInfo:
    name: str
    collection_count: int
    collected: int
    uncollectable: int
    collection_time: float


@dataclass
class RuntimeMetrics:
    memory: MemoryInfo
    runtime: RuntimeInfo
    threads: ThreadInfo
    operating_system: OperatingSystemInfo
    garbage_collection: List[GarbageCollectorInfo] = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


class GcTimer:
    """Accumulates time spent in each collector generation via gc.callbacks."""

    def __init__(self):
        self._lock = threading.Lock()
        self._started_at = None
        self._totals = {}
        self._installed = False

    def install(self):
        with self._lock:
            if not self._installed:
                gc.callbacks.append(self._on_gc)
                self._installed = True

    def uninstall(self):
        with self._lock:
            if self._installed:
                gc.callbacks.remove(self._on_gc)
                self._installed = False

    def _on_gc(self, phase, info):
        # Collections never nest, so a single start stamp is enough.
        if phase == "start":
            self._started_at = time.perf_counter()
        elif phase == "stop" and self._started_at is not None:
            elapsed = time.perf_counter() - self._started_at
            self._started_at = None
            generation = info.get("generation", 0)
            self._totals[generation] = self._totals.get(generation, 0.0) + elapsed

    def total(self, generation):
        return self._totals.get(generation, 0.0)


gc_timer = GcTimer()


def _ratio(part, whole):
    return part / whole if whole > 0 else 0.0


class RuntimeInspector:
    """Reads process statistics through psutil and the interpreter's own APIs."""

    def __init__(self, process=None, timer=gc_timer):
        self._process = process or psutil.Process(os.getpid())
        self._timer = timer
        self._timer.install()
        self._peak_lock = threading.Lock()
        self._peak_threads = 0

    def memory(self) -> MemoryInfo:
        proc_mem = self._process.memory_info()
        system = psutil.virtual_memory()
        return MemoryInfo(
            rss=proc_mem.rss,
            vms=proc_mem.vms,
            system_total=system.total,
            system_available=system.available,
            system_percent=system.percent,
            utilization_ratio=_ratio(proc_mem.rss, system.total),
        )

    def runtime(self) -> RuntimeInfo:
        started = self._process.create_time()
        return RuntimeInfo(
            uptime_seconds=max(time.time() - started, 0.0),
            start_time=started,
            pid=self._process.pid,
            implementation=platform.python_implementation(),
            python_version=platform.python_version(),
            compiler=platform.python_compiler(),
            executable=sys.executable,
        )

    def threads(self) -> ThreadInfo:
        live = threading.enumerate()
        count = len(live)
        with self._peak_lock:
            self._peak_threads = max(self._peak_threads, count)
            peak = self._peak_threads
        return ThreadInfo(
            thread_count=count,
            peak_thread_count=peak,
            daemon_thread_count=sum(1 for t in live if t.daemon),
            native_thread_count=self._process.num_threads(),
        )

    def operating_system(self) -> OperatingSystemInfo:
        try:
            load = list(os.getloadavg())
        except (AttributeError, OSError):
            load = None
        return OperatingSystemInfo(
            name=platform.system(),
            release=platform.release(),
            version=platform.version(),
            arch=platform.machine(),
            available_processors=os.cpu_count() or 0,
            load_average=load,
        )

    def garbage_collection(self) -> List[GarbageCollectorInfo]:
        return [
            GarbageCollectorInfo(
                name=f"generation{generation}",
                collection_count=stats.get("collections", 0),
                collected=stats.get("collected", 0),
                uncollectable=stats.get("uncollectable", 0),
                collection_time=self._timer.total(generation),
            )
            for generation, stats in enumerate(gc.get_stats())
        ]

    def snapshot(self) -> RuntimeMetrics:
        return RuntimeMetrics(
            memory=self.memory(),
            runtime=self.runtime(),
            threads=self.threads(),
            operating_system=self.operating_system(),
            garbage_collection=self.garbage_collection(),
        )

    def memory_utilization_ratio(self) -> float:
        return _ratio(self._process.memory_info().rss, psutil.virtual_memory().total)

    def daemon_thread_ratio(self) -> float:
        live = threading.enumerate()
        return _ratio(sum(1 for t in live if t.daemon), len(live))
