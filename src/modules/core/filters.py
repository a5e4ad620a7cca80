"""Ordering driven by repeatable ``sort=property[,asc|desc]`` parameters."""

from __future__ import annotations

from typing import Dict, List

from rest_framework.filters import OrderingFilter

from modules.core.exceptions import MalformedRequest, Violation

DIRECTIONS = {"asc": "", "desc": "-"}


class SortOrderingFilter(OrderingFilter):
    """``OrderingFilter`` over the view's ``ordering_fields`` labels.

    ``ordering_fields`` holds ``(model_field, public_label)`` pairs; clients
    sort by label only.  Unknown labels and directions are rejected, and
    ``id`` is always appended so pages are stable.
    """

    ordering_param = "sort"
    tie_breaker = "id"

    def get_ordering(self, request, queryset, view) -> List[str]:
        params = [p for p in request.query_params.getlist(self.ordering_param) if p]
        if not params:
            ordering = list(self.get_default_ordering(view) or ())
        else:
            labels = self._label_map(queryset, view, request)
            ordering = [self._parse(param, labels) for param in params]
        if self.tie_breaker not in ordering:
            ordering.append(self.tie_breaker)
        return ordering

    def _label_map(self, queryset, view, request) -> Dict[str, str]:
        fields = self.get_valid_fields(queryset, view, {"request": request})
        return {label: field for field, label in fields}

    def _parse(self, param: str, labels: Dict[str, str]) -> str:
        prop, _, direction = (part.strip() for part in param.partition(","))
        if prop not in labels:
            raise MalformedRequest(
                "invalid-argument",
                f"Cannot sort by {prop!r}",
                violations=[
                    Violation(
                        "sort",
                        "pagination.sort.invalid",
                        {"value": prop, "allowed": ", ".join(labels)},
                        invalid_value=prop,
                    )
                ],
            )
        prefix = DIRECTIONS.get(direction.lower() or "asc")
        if prefix is None:
            raise MalformedRequest(
                "invalid-argument",
                f"Invalid sort direction {direction!r}",
                violations=[
                    Violation(
                        "sort",
                        "pagination.direction.invalid",
                        {"value": direction},
                        invalid_value=direction,
                    )
                ],
            )
        return prefix + labels[prop]
