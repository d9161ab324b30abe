from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

_JUNIOR = ("maths", "english", "kiswahili", "integrated")
_UPPER = ("maths", "english", "kiswahili", "integrated", "social", "creative")
_SENIOR = (
    "maths",
    "english",
    "kiswahili",
    "integrated",
    "social",
    "pretech",
    "creative",
    "agriculture",
    "cre",
)

SUBJECTS_BY_CLASS: dict[str, tuple[str, ...]] = {
    "Playgroup": ("maths", "language", "reading", "environmental", "integrated"),
    "PP1": ("maths", "language", "reading", "creative", "cre", "environmental"),
    "PP2": ("maths", "language", "reading", "kiswahili", "kusoma"),
    "Grade 1": _JUNIOR,
    "Grade 2": _JUNIOR,
    "Grade 3": _JUNIOR,
    "Grade 4": _UPPER,
    "Grade 5": _UPPER,
    "Grade 6": _UPPER,
    "Grade 7": _SENIOR,
    "Grade 8": _SENIOR,
    "Grade 9": _SENIOR,
}

DISPLAY_NAMES: dict[str, str] = {
    "maths": "Maths",
    "english": "English",
    "kiswahili": "Kiswahili",
    "language": "Language",
    "reading": "Reading",
    "environmental": "Environmental",
    "integrated": "Integrated",
    "creative": "Creative",
    "cre": "CRE",
    "kusoma": "Kusoma",
    "social": "Social",
    "pretech": "Pretech",
    "agriculture": "Agriculture",
}

DEFAULT_CLASS = "Grade 1"


@dataclass(frozen=True)
class SubjectRegistry:
    """Read-only lookup of the subjects scored for each class."""

    subjects_by_class: Mapping[str, tuple[str, ...]]
    display_names: Mapping[str, str]
    default_class: str

    @classmethod
    def build(
        cls,
        subjects_by_class: Mapping[str, tuple[str, ...]],
        display_names: Mapping[str, str],
        default_class: str,
    ) -> "SubjectRegistry":
        table: dict[str, tuple[str, ...]] = {}
        for class_name, subjects in subjects_by_class.items():
            subjects = tuple(subjects)
            if not subjects:
                raise ValueError(f"Class {class_name!r} has no subjects")
            if len(set(subjects)) != len(subjects):
                raise ValueError(f"Class {class_name!r} lists a subject twice")
            table[class_name] = subjects
        if default_class not in table:
            raise ValueError(f"Default class {default_class!r} is not registered")
        return cls(
            subjects_by_class=MappingProxyType(table),
            display_names=MappingProxyType(dict(display_names)),
            default_class=default_class,
        )

    def subjects_for_class(self, class_name: str | None) -> tuple[str, ...]:
        if not class_name:
            return self.subjects_by_class[self.default_class]
        return self.subjects_by_class.get(class_name, self.subjects_by_class[self.default_class])

    def display_name(self, subject: str) -> str:
        return self.display_names.get(subject, subject)

    def class_names(self) -> tuple[str, ...]:
        return tuple(self.subjects_by_class)

    def all_subjects(self) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for subjects in self.subjects_by_class.values():
            for subject in subjects:
                seen.setdefault(subject, None)
        return tuple(seen)


DEFAULT_REGISTRY = SubjectRegistry.build(SUBJECTS_BY_CLASS, DISPLAY_NAMES, DEFAULT_CLASS)


def subjects_for_class(class_name: str | None, registry: SubjectRegistry = DEFAULT_REGISTRY) -> tuple[str, ...]:
    """Subjects for ``class_name``; unknown or empty names get the default class's set."""
    return registry.subjects_for_class(class_name)


def display_name(subject: str, registry: SubjectRegistry = DEFAULT_REGISTRY) -> str:
    return registry.display_name(subject)


def class_names(registry: SubjectRegistry = DEFAULT_REGISTRY) -> tuple[str, ...]:
    return registry.class_names()


def all_subjects(registry: SubjectRegistry = DEFAULT_REGISTRY) -> tuple[str, ...]:
    return registry.all_subjects()
