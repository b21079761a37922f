"""Service for parsing and applying search filters to tasks."""

import re
from dataclasses import dataclass, field

from ..models import Task


@dataclass
class Filter:
    """Represents a parsed filter expression."""

    text: str | None = None  # Free text search
    tags: list[str] = field(default_factory=list)  # tag:value
    exclude_tags: list[str] = field(default_factory=list)  # -tag:value
    priorities: list[str] = field(default_factory=list)  # priority:value
    assignees: list[str] = field(default_factory=list)  # assignee:value

    @property
    def is_empty(self) -> bool:
        return not (
            self.text or self.tags or self.exclude_tags or self.priorities or self.assignees
        )


class FilterService:
    """Service for parsing and applying filters to tasks.

    Filtering only decides which tasks are shown. Task objects are passed
    through untouched, so their status and position never change.
    """

    # Pattern for key:value tokens
    TOKEN_PATTERN = re.compile(r"(-?)(?:(tag|priority|assignee):)?(\S+)")

    def parse(self, expression: str) -> Filter:
        """
        Parse a filter expression string.

        Syntax:
        - Free text: matches title, description or tags
        - tag:value: filter by tag
        - -tag:value: exclude tag
        - priority:low/medium/high/critical
        - assignee:name

        Multiple conditions are ANDed together.
        """
        f = Filter()
        text_parts: list[str] = []

        for match in self.TOKEN_PATTERN.finditer(expression):
            negated = match.group(1) == "-"
            key = match.group(2)
            value = match.group(3).lower()

            if key is None:
                # Negated free text is not supported; keep the dash as text
                text_parts.append(("-" if negated else "") + match.group(3))
            elif key == "tag":
                if negated:
                    f.exclude_tags.append(value)
                else:
                    f.tags.append(value)
            elif key == "priority":
                f.priorities.append(value)
            elif key == "assignee":
                f.assignees.append(value)

        if text_parts:
            f.text = " ".join(text_parts)

        return f

    def apply(self, tasks: list[Task], filter_: Filter) -> list[Task]:
        """Return the tasks matching the filter, in input order."""
        return [task for task in tasks if self._matches(task, filter_)]

    def filter_columns(
        self, grouped: dict[str, list[Task]], filter_: Filter
    ) -> dict[str, list[Task]]:
        """
        Apply a filter to grouped columns.

        Columns left with no matching task are dropped from the result;
        column order is preserved.
        """
        result: dict[str, list[Task]] = {}
        for column_id, tasks in grouped.items():
            matching = self.apply(tasks, filter_)
            if matching:
                result[column_id] = matching
        return result

    def search(self, grouped: dict[str, list[Task]], query: str) -> dict[str, list[Task]]:
        """Parse ``query`` and filter the grouped columns with it."""
        return self.filter_columns(grouped, self.parse(query))

    def _matches(self, task: Task, f: Filter) -> bool:
        """Check if a task matches the filter."""
        task_tags = [t.lower() for t in task.tags]

        # Text search (case-insensitive substring)
        if f.text:
            needle = f.text.lower()
            in_title = needle in task.title.lower()
            in_description = needle in (task.description or "").lower()
            in_tags = any(needle in tag for tag in task_tags)
            if not (in_title or in_description or in_tags):
                return False

        # Tag inclusion (any match)
        if f.tags and not any(tag in task_tags for tag in f.tags):
            return False

        # Tag exclusion (no matches)
        if f.exclude_tags and any(tag in task_tags for tag in f.exclude_tags):
            return False

        if f.priorities and task.priority.lower() not in f.priorities:
            return False

        if f.assignees and (task.assignee or "").lower() not in f.assignees:
            return False

        return True
