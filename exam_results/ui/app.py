from __future__ import annotations

import logging

import flet as ft

from exam_results.config.settings import settings
from exam_results.domain.logic.subjects import all_subjects, class_names, display_name, subjects_for_class
from exam_results.domain.logic.summary import class_average
from exam_results.domain.models.entities import EXAM_TYPES, StudentRecord
from exam_results.services.auth_service import AuthService, AuthServiceError
from exam_results.services.results_service import ResultsService
from exam_results.services.storage import ResultStore, StoreError

logger = logging.getLogger(__name__)

ALL = "All"


def parse_mark(text: str | None) -> float | None:
    text = (text or "").strip()
    if not text:
        return None
    return float(text)


def format_mean(mean: float | None) -> str:
    return f"{mean:.2f}" if mean is not None else "-"


class ExamResultsApp:
    def __init__(self, page: ft.Page) -> None:
        self.page = page
        self.page.title = "Exam Results"
        self.page.scroll = ft.ScrollMode.AUTO
        self.auth = AuthService.from_settings()
        self.results = ResultsService(ResultStore(settings.db_path))
        self.user: str | None = None

        self.class_name = class_names()[0]
        self.exam_type = EXAM_TYPES[0]
        self.entries: list[StudentRecord] = []
        self.report_id: int | None = None

        self.auth_error = ft.Text(color=ft.Colors.RED)
        self.username = ft.TextField(label="Username", width=300)
        self.password = ft.TextField(label="Password", width=300, password=True, can_reveal_password=True)

    def run(self) -> None:
        self.show_login_view()

    def show_login_view(self) -> None:
        self.user = None
        self.page.clean()
        self.page.add(
            ft.Column(
                [
                    ft.Text("Exam Results", size=32, weight=ft.FontWeight.BOLD),
                    ft.Text("Sign in to record marks"),
                    self.username,
                    self.password,
                    ft.ElevatedButton("Sign In", on_click=self.handle_login),
                    self.auth_error,
                ],
                tight=True,
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            )
        )

    def handle_login(self, _: ft.ControlEvent) -> None:
        try:
            self.user = self.auth.login(self.username.value, self.password.value)
        except AuthServiceError as exc:
            self.auth_error.value = str(exc)
            self.page.update()
            return
        self.password.value = ""
        self.show_main_app()

    def load_entries(self) -> None:
        """Stored rows for the selected class and sitting, ready to edit."""
        self.entries = self.results.entries(self.class_name, self.exam_type)

    def show_main_app(self) -> None:
        self.page.clean()

        entry_container = ft.Container()
        marklist_container = ft.Container()
        report_container = ft.Container()

        def refresh_all() -> None:
            entry_container.content = self.entry_view(refresh_all)
            marklist_container.content = self.marklist_view(open_report)
            report_container.content = self.report_view()
            self.page.update()

        def open_report(result_id: int) -> None:
            self.report_id = result_id
            tabs.selected_index = 2
            refresh_all()

        tabs = ft.Tabs(
            selected_index=0,
            tabs=[
                ft.Tab(text="Enter Marks", content=entry_container),
                ft.Tab(text="Marklist", content=marklist_container),
                ft.Tab(text="Report", content=report_container),
            ],
            expand=1,
        )
        self.load_entries()

        self.page.add(
            ft.Row(
                [
                    ft.Text("Exam Results", size=28, weight=ft.FontWeight.BOLD),
                    ft.TextButton("Logout", on_click=lambda _: self.show_login_view()),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            tabs,
        )
        refresh_all()

    def entry_view(self, refresh_all) -> ft.Control:
        subjects = subjects_for_class(self.class_name)
        error = ft.Text(color=ft.Colors.RED)

        def pick_class(e: ft.ControlEvent) -> None:
            self.class_name = e.control.value
            self.load_entries()
            refresh_all()

        def pick_exam(e: ft.ControlEvent) -> None:
            self.exam_type = e.control.value
            self.load_entries()
            refresh_all()

        def add_row(_: ft.ControlEvent) -> None:
            self.entries.append(self.results.start_entry(self.class_name, self.exam_type))
            refresh_all()

        class_dd = ft.Dropdown(
            label="Class",
            options=[ft.dropdown.Option(c) for c in class_names()],
            value=self.class_name,
            on_change=pick_class,
        )
        exam_dd = ft.Dropdown(
            label="Exam",
            options=[ft.dropdown.Option(t, t.title()) for t in EXAM_TYPES],
            value=self.exam_type,
            on_change=pick_exam,
        )

        header = ft.Row(
            [ft.Text("Name", width=160, weight=ft.FontWeight.BOLD)]
            + [ft.Text(display_name(s), width=80, weight=ft.FontWeight.BOLD) for s in subjects]
            + [
                ft.Text("Mean", width=70, weight=ft.FontWeight.BOLD),
                ft.Text("Rubric", width=220, weight=ft.FontWeight.BOLD),
            ]
        )
        rows = [self._entry_row(idx, subjects, error, refresh_all) for idx in range(len(self.entries))]

        return ft.Column(
            [
                ft.Row([class_dd, exam_dd]),
                ft.Divider(),
                header,
                *rows,
                ft.ElevatedButton("Add Student", on_click=add_row),
                error,
            ]
        )

    def _entry_row(self, idx: int, subjects: tuple[str, ...], error: ft.Text, refresh_all) -> ft.Control:
        record = self.entries[idx]
        mean_text = ft.Text(format_mean(record.mean), width=70)
        rubric_text = ft.Text(record.rubric or "-", width=220)

        def show(updated: StudentRecord) -> None:
            self.entries[idx] = updated
            mean_text.value = format_mean(updated.mean)
            rubric_text.value = updated.rubric or "-"
            error.value = ""
            self.page.update()

        def on_name(e: ft.ControlEvent) -> None:
            show(self.results.rename(self.entries[idx], e.control.value))

        def on_mark(e: ft.ControlEvent, subject: str) -> None:
            try:
                show(self.results.edit_score(self.entries[idx], subject, parse_mark(e.control.value)))
            except (ValueError, TypeError) as exc:
                logger.debug("Rejected mark for %s: %s", subject, exc)
                error.value = str(exc)
                self.page.update()

        def save(_: ft.ControlEvent) -> None:
            try:
                self.entries[idx] = self.results.save(self.entries[idx])
            except StoreError as exc:
                error.value = str(exc)
                self.page.update()
                return
            refresh_all()

        def remove(_: ft.ControlEvent) -> None:
            current = self.entries[idx]
            if current.id is not None:
                try:
                    self.results.delete(current.id)
                except StoreError as exc:
                    error.value = str(exc)
                    self.page.update()
                    return
            self.entries.pop(idx)
            refresh_all()

        def mark_value(subject: str) -> str:
            value = record.scores.get(subject)
            return "" if value is None else f"{value:g}"

        return ft.Row(
            [ft.TextField(value=record.name, width=160, on_change=on_name)]
            + [
                ft.TextField(
                    value=mark_value(s),
                    width=80,
                    on_change=lambda e, subject=s: on_mark(e, subject),
                )
                for s in subjects
            ]
            + [
                mean_text,
                rubric_text,
                ft.ElevatedButton("Save", on_click=save),
                ft.IconButton(icon=ft.Icons.DELETE, on_click=remove),
            ]
        )

    def marklist_view(self, open_report) -> ft.Control:
        class_filter = ft.Dropdown(
            label="Class",
            options=[ft.dropdown.Option(ALL)] + [ft.dropdown.Option(c) for c in class_names()],
            value=self.class_name,
        )
        exam_filter = ft.Dropdown(
            label="Exam",
            options=[ft.dropdown.Option(ALL)] + [ft.dropdown.Option(t, t.title()) for t in EXAM_TYPES],
            value=self.exam_type,
        )
        table = ft.Column()

        def load(e: ft.ControlEvent | None = None) -> None:
            class_name = None if class_filter.value == ALL else class_filter.value
            exam_type = None if exam_filter.value == ALL else exam_filter.value
            ranked = self.results.marklist(exam_type=exam_type, class_name=class_name)
            subjects = subjects_for_class(class_name) if class_name else all_subjects()
            lines: list[ft.Control] = [
                ft.Row(
                    [
                        ft.Text("Pos", width=40, weight=ft.FontWeight.BOLD),
                        ft.Text("Name", width=160, weight=ft.FontWeight.BOLD),
                        ft.Text("Class", width=90, weight=ft.FontWeight.BOLD),
                        ft.Text("Exam", width=80, weight=ft.FontWeight.BOLD),
                    ]
                    + [ft.Text(display_name(s), width=80, weight=ft.FontWeight.BOLD) for s in subjects]
                    + [
                        ft.Text("Mean", width=70, weight=ft.FontWeight.BOLD),
                        ft.Text("Rubric", width=220, weight=ft.FontWeight.BOLD),
                    ]
                )
            ]
            for r in ranked:
                lines.append(
                    ft.Row(
                        [
                            ft.Text(str(r.position), width=40),
                            ft.Text(r.name or "-", width=160),
                            ft.Text(r.class_name, width=90),
                            ft.Text(r.exam_type.title(), width=80),
                        ]
                        + [ft.Text(mark_text(r.scores.get(s)), width=80) for s in subjects]
                        + [
                            ft.Text(format_mean(r.mean), width=70),
                            ft.Text(r.rubric or "-", width=220),
                            ft.TextButton("Report", on_click=lambda _, rid=r.id: open_report(rid)),
                        ]
                    )
                )
            if not ranked:
                lines.append(ft.Text("No results recorded"))
            elif class_name and exam_type:
                lines.append(ft.Divider())
                lines.append(ft.Text(f"Class average: {class_average(ranked):.2f}", size=18, weight=ft.FontWeight.BOLD))
            table.controls = lines
            if e is not None:
                self.page.update()

        class_filter.on_change = load
        exam_filter.on_change = load
        load()
        return ft.Column([ft.Row([class_filter, exam_filter]), ft.Divider(), table])

    def report_view(self) -> ft.Control:
        if self.report_id is None:
            return ft.Text("Pick a student from the marklist")
        try:
            card = self.results.report_card(self.report_id)
        except StoreError as exc:
            return ft.Text(str(exc), color=ft.Colors.RED)

        record = card.record
        subject_lines = [
            ft.Row(
                [
                    ft.Text(line.label, width=120),
                    ft.Text(mark_text(line.score), width=60),
                    ft.Text(line.rubric or "-", width=220),
                    ft.Text(line.remark),
                ]
            )
            for line in card.subjects
        ]
        overall = f"{card.overall:.2f}" if card.overall is not None else "N/A"

        return ft.Column(
            [
                ft.Text(record.name or "-", size=24, weight=ft.FontWeight.BOLD),
                ft.Text(f"{record.class_name} • {record.exam_type.title()} exam"),
                ft.Text(f"Class Position: {record.position} of {card.class_size}"),
                ft.Divider(),
                *subject_lines,
                ft.Divider(),
                ft.Text(
                    f"Overall Performance: {format_mean(record.mean)} | Rubric: {record.rubric or 'N/A'}",
                    size=18,
                    weight=ft.FontWeight.BOLD,
                ),
                ft.Text(f"Class average: {card.class_average:.2f}"),
                ft.Text(f"Weighted term score (opener 30%, midterm 30%, endterm 40%): {overall}"),
                ft.Text(card.remark, italic=True),
            ]
        )


def mark_text(value: float | None) -> str:
    return "-" if value is None else f"{value:g}"


def main(page: ft.Page) -> None:
    ExamResultsApp(page).run()
