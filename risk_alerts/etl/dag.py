"""
Small DAG runner used to chain the fetch, assess, partition, report and
submit stages.

Tasks are plain callables that take the shared context dict and return a
dict of new keys. A task that raises is marked failed and everything
downstream of it is skipped; independent branches still run.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)

TaskFn = Callable[[dict[str, Any]], "dict[str, Any] | None"]


class TaskStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class TaskNode:
    name: str
    execute_fn: TaskFn
    depends_on: list[str] = field(default_factory=list)
    status: TaskStatus = TaskStatus.PENDING
    result: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    duration_ms: float = 0.0

    def summary(self) -> dict[str, Any]:
        if self.status == TaskStatus.SKIPPED:
            return {"status": self.status.value}
        return {
            "status": self.status.value,
            "duration_ms": round(self.duration_ms, 2),
            "error": self.error,
        }


class DAG:
    """
    Usage:
        dag = DAG("risk_alerts")
        dag.add_task("fetch", fetch)
        dag.add_task("assess", assess, depends_on=["fetch"])
        summary = dag.run({"submit": False})
        alerts = dag.context["alerts"]
    """

    def __init__(self, name: str):
        self.name = name
        self.tasks: dict[str, TaskNode] = {}
        self.context: dict[str, Any] = {}

    def add_task(
        self,
        name: str,
        execute_fn: TaskFn,
        depends_on: list[str] | None = None,
    ) -> DAG:
        if name in self.tasks:
            raise ValueError(f"Duplicate task name: {name}")
        self.tasks[name] = TaskNode(name=name, execute_fn=execute_fn, depends_on=list(depends_on or []))
        return self

    def execution_order(self) -> list[str]:
        """Tasks in dependency order; insertion order breaks ties."""
        remaining = {name: len(task.depends_on) for name, task in self.tasks.items()}
        dependents: dict[str, list[str]] = {name: [] for name in self.tasks}
        for task in self.tasks.values():
            for dep in task.depends_on:
                if dep not in self.tasks:
                    raise ValueError(f"Task '{task.name}' depends on unknown task '{dep}'")
                dependents[dep].append(task.name)

        ready = deque(name for name, count in remaining.items() if count == 0)
        order: list[str] = []
        while ready:
            current = ready.popleft()
            order.append(current)
            for child in dependents[current]:
                remaining[child] -= 1
                if remaining[child] == 0:
                    ready.append(child)

        if len(order) != len(self.tasks):
            raise ValueError("Cycle detected in DAG")
        return order

    def _blocked(self, task: TaskNode) -> bool:
        return any(
            self.tasks[dep].status in (TaskStatus.FAILED, TaskStatus.SKIPPED)
            for dep in task.depends_on
        )

    def run(self, initial_context: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run every task once and return a per-task status summary."""
        order = self.execution_order()
        self.context = dict(initial_context or {})
        summary: dict[str, Any] = {"pipeline": self.name, "tasks": {}}
        logger.info("Starting pipeline '%s' with %d tasks", self.name, len(order))

        for name in order:
            task = self.tasks[name]
            if self._blocked(task):
                task.status = TaskStatus.SKIPPED
                logger.warning("Skipping '%s', upstream dependency did not succeed", name)
                summary["tasks"][name] = task.summary()
                continue

            task.status = TaskStatus.RUNNING
            logger.debug("Running task '%s'", name)
            started = time.perf_counter()
            try:
                task.result = task.execute_fn(self.context) or {}
                self.context.update(task.result)
                task.status = TaskStatus.SUCCESS
            except Exception as exc:
                task.status = TaskStatus.FAILED
                task.error = str(exc)
                logger.error("Task '%s' failed: %s", name, exc)
            finally:
                task.duration_ms = (time.perf_counter() - started) * 1000
            summary["tasks"][name] = task.summary()

        ok = all(t.status == TaskStatus.SUCCESS for t in self.tasks.values())
        summary["status"] = "completed" if ok else "failed"
        logger.info("Pipeline '%s' finished: %s", self.name, summary["status"])
        return summary

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "tasks": {name: {"depends_on": list(t.depends_on)} for name, t in self.tasks.items()},
        }
