"""Interactive CLI application."""
from dataclasses import replace
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.prompt import Prompt, IntPrompt, Confirm

from palette_navigator.app_state import AppContext
from palette_navigator.config import load_settings
from palette_navigator.db import init_db
from palette_navigator.dashboard import (
    get_learning_stats, get_media_stats, get_progress_color, get_progress_label,
    get_task_stats,
)
from palette_navigator.errors import Status
from palette_navigator.formatting import (
    due_date_display, format_duration, format_percentage, truncate,
)
from palette_navigator.importer import import_media_items, import_tasks
from palette_navigator.learning import LearningStore, completed_lessons_count
from palette_navigator.logging_config import init_logging
from palette_navigator.models import (
    ONBOARDING_STEPS, AppPhase, EducationalModule, MainTab, MediaItem, MediaType, Task,
    TaskCategory, TaskPriority,
)
from palette_navigator.seed import is_seeded

console = Console()

EXIT_WORDS = ("q", "menu")
DUE_PROMPT = "Due [dim](days from now or YYYY-MM-DD, none to clear)[/dim]"


class SessionExitRequested(Exception):
    """Raised when the user types q/menu at a prompt inside a session."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def session_int_prompt(prompt: str, choices: list[str]) -> int:
    answer = session_prompt(prompt, choices=choices + list(EXIT_WORDS), show_choices=False)
    return int(answer)


def report(status: Status, success: str) -> None:
    if status is Status.OK:
        console.print(f"[green]{success}[/green]")
    elif status is Status.WRITE_ERROR:
        console.print("[red]Saved in memory only: could not write to disk.[/red]")
    elif status is Status.NOT_FOUND:
        console.print("[yellow]Not found.[/yellow]")
    else:
        console.print(f"[yellow]{status.value.replace('_', ' ').capitalize()}.[/yellow]")


def show_welcome():
    console.print(Panel(
        "[bold]Palette Navigator[/bold]\n[dim]Tasks, media and learning in one place[/dim]",
        title="Welcome", border_style="red",
    ))


def run_onboarding(ctx: AppContext) -> None:
    for i, step in enumerate(ONBOARDING_STEPS, 1):
        console.print(Panel(step.description, title=f"{i}/{len(ONBOARDING_STEPS)}  {step.title}"))
        if i < len(ONBOARDING_STEPS) and Prompt.ask("[dim]Enter to continue, s to skip[/dim]", default="") == "s":
            break
    ctx.state.complete_onboarding()
    console.print("[green]You're all set![/green]\n")


def show_menu(ctx: AppContext):
    console.print(f"\n[bold]Commands[/bold] [dim]({ctx.state.selected_tab.title})[/dim]")
    commands = [
        ("tasks", "List and filter tasks"),
        ("add-task", "Create a task"),
        ("toggle-task", "Mark a task done / not done"),
        ("edit-task", "Edit a task"),
        ("delete-task", "Delete a task"),
        ("media", "Browse the media library"),
        ("add-media", "Add a media item"),
        ("delete-media", "Delete a media item"),
        ("favorite", "Toggle a favorite"),
        ("playlists", "View and edit playlists"),
        ("learn", "Study a learning module"),
        ("dashboard", "Progress overview"),
        ("import", "Import tasks or media from a file"),
        ("tab", "Switch tab"),
        ("reset-onboarding", "Show the introduction again"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<18}[/cyan] {desc}")


def pick(title: str, records: list, label) -> object | None:
    if not records:
        console.print("[yellow]Nothing to choose from.[/yellow]")
        return None
    for i, record in enumerate(records, 1):
        console.print(f"  [cyan]{i}[/cyan]) {label(record)}")
    index = IntPrompt.ask(title, choices=[str(i) for i in range(1, len(records) + 1)])
    return records[index - 1]


def render_tasks(tasks: list[Task]) -> None:
    table = Table(title="Tasks")
    table.add_column("", width=2)
    table.add_column("Title", style="cyan")
    table.add_column("Priority")
    table.add_column("Category")
    table.add_column("Due")
    colors = {TaskPriority.HIGH: "red", TaskPriority.MEDIUM: "yellow", TaskPriority.LOW: "green"}
    for t in tasks:
        color = colors[t.priority]
        table.add_row(
            "[green]✓[/green]" if t.is_completed else "",
            truncate(t.title, 40),
            f"[{color}]{t.priority.value}[/{color}]",
            t.category.value,
            due_date_display(t.due_date) if t.due_date else "",
        )
    console.print(table)


def cmd_tasks(ctx: AppContext):
    store = ctx.tasks
    category = Prompt.ask("Category", choices=["all"] + [c.value for c in TaskCategory], default="all")
    priority = Prompt.ask("Priority", choices=["all"] + [p.value for p in TaskPriority], default="all")
    store.selected_category = None if category == "all" else TaskCategory(category)
    store.selected_priority = None if priority == "all" else TaskPriority(priority)
    store.search_text = Prompt.ask("Search", default="")
    if store.filtered_tasks:
        render_tasks(store.filtered_tasks)
    else:
        console.print("[yellow]No tasks match. Try adjusting your filters.[/yellow]")
    console.print(
        f"  Total: [bold]{store.total_tasks_count}[/bold]  |  "
        f"Completed: [bold]{store.completed_tasks_count}[/bold]  |  "
        f"Progress: [bold]{format_percentage(store.completion_progress)}[/bold]"
    )
    store.clear_filters()


def parse_due_date(text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Blank or 'none' clears the date; a whole number is days from now.

    Anything else must be an ISO date and raises ValueError otherwise.
    """
    text = text.strip()
    if not text or text.lower() == "none":
        return None
    if text.lstrip("-").isdigit():
        return (now or datetime.now()) + timedelta(days=int(text))
    return datetime.fromisoformat(text)


def cmd_add_task(ctx: AppContext):
    title = Prompt.ask("Title").strip()
    if not title:
        console.print("[red]A title is required.[/red]")
        return
    description = Prompt.ask("Description", default="")
    priority = TaskPriority(Prompt.ask("Priority", choices=[p.value for p in TaskPriority], default="Medium"))
    category = TaskCategory(Prompt.ask("Category", choices=[c.value for c in TaskCategory], default="Personal"))
    due_text = Prompt.ask(DUE_PROMPT, default="")
    try:
        due_date = parse_due_date(due_text)
    except ValueError:
        console.print(f"[red]Not a date: {due_text}[/red]")
        return
    task = Task(title=title, description=description, priority=priority,
                category=category, due_date=due_date)
    report(ctx.tasks.add_task(task), f"Added '{task.title}'.")


def cmd_toggle_task(ctx: AppContext):
    task = pick("Task", ctx.tasks.tasks, lambda t: f"{'✓' if t.is_completed else ' '} {t.title}")
    if task:
        report(ctx.tasks.toggle_task_completion(task), "Updated.")


def cmd_edit_task(ctx: AppContext):
    task = pick("Task", ctx.tasks.tasks, lambda t: t.title)
    if task is None:
        return
    current_due = task.due_date.date().isoformat() if task.due_date else ""
    title = Prompt.ask("Title", default=task.title).strip() or task.title
    description = Prompt.ask("Description", default=task.description)
    priority = Prompt.ask("Priority", choices=[p.value for p in TaskPriority], default=task.priority.value)
    category = Prompt.ask("Category", choices=[c.value for c in TaskCategory], default=task.category.value)
    due_text = Prompt.ask(DUE_PROMPT, default=current_due)
    if due_text.strip() == current_due:
        due_date = task.due_date
    else:
        try:
            due_date = parse_due_date(due_text)
        except ValueError:
            console.print(f"[red]Not a date: {due_text}[/red]")
            return
    edited = replace(task, title=title, description=description, priority=TaskPriority(priority),
                     category=TaskCategory(category), due_date=due_date)
    report(ctx.tasks.update_task(edited), "Updated.")


def cmd_delete_task(ctx: AppContext):
    task = pick("Task", ctx.tasks.tasks, lambda t: t.title)
    if task and Confirm.ask(f"Delete '{task.title}'?", default=False):
        report(ctx.tasks.delete_task(task), "Deleted.")


def cmd_media(ctx: AppContext):
    store = ctx.media
    store.search_text = Prompt.ask("Search", default="")
    for media_type, items in store.media_items_by_type.items():
        table = Table(title=media_type.value)
        table.add_column("Title", style="cyan")
        table.add_column("Category")
        table.add_column("Rating")
        table.add_column("Fav")
        for item in items:
            table.add_row(item.title, item.category, "★" * item.rating, "♥" if item.is_favorite else "")
        console.print(table)
    store.clear_filters()


def cmd_add_media(ctx: AppContext):
    title = Prompt.ask("Title").strip()
    if not title:
        console.print("[red]A title is required.[/red]")
        return
    item = MediaItem(
        title=title,
        description=Prompt.ask("Description", default=""),
        type=MediaType(Prompt.ask("Type", choices=[t.value for t in MediaType], default="Music")),
        category=Prompt.ask("Category", default=""),
        rating=int(Prompt.ask("Rating", choices=[str(n) for n in range(6)], default="0")),
    )
    report(ctx.media.add_media_item(item), f"Added '{item.title}'.")


def cmd_delete_media(ctx: AppContext):
    store = ctx.media
    item = pick("Item", store.media_items, lambda i: f"{i.title} [dim]({i.type.value})[/dim]")
    if item is None:
        return
    in_playlists = sum(1 for p in store.playlists if p.contains(item.id))
    note = f" It is in {in_playlists} playlist(s)." if in_playlists else ""
    if Confirm.ask(f"Delete '{item.title}'?{note}", default=False):
        report(store.delete_media_item(item), "Deleted.")


def cmd_favorite(ctx: AppContext):
    item = pick("Item", ctx.media.media_items, lambda i: f"{'♥' if i.is_favorite else ' '} {i.title}")
    if item:
        report(ctx.media.toggle_favorite(item), "Updated.")


def cmd_playlists(ctx: AppContext):
    store = ctx.media
    for p in store.playlists:
        console.print(f"  [bold]{p.name}[/bold] [dim]{p.description}[/dim] ({len(p.items)} items)")
        for item in p.items:
            console.print(f"    - {item.title}")
    action = Prompt.ask("Action", choices=["done", "create", "add", "remove", "delete"], default="done")
    if action == "create":
        name = Prompt.ask("Name").strip()
        if not name:
            console.print("[red]A name is required.[/red]")
            return
        status, playlist = store.create_playlist(name, Prompt.ask("Description", default=""),
                                                 Prompt.ask("Color", default="#ffc934"))
        report(status, f"Created '{playlist.name}'.")
        return
    if action == "done":
        return
    playlist = pick("Playlist", store.playlists, lambda p: p.name)
    if playlist is None:
        return
    if action == "delete":
        if Confirm.ask(f"Delete '{playlist.name}'?"):
            report(store.delete_playlist(playlist), "Deleted.")
        return
    source = store.media_items if action == "add" else playlist.items
    item = pick("Item", source, lambda i: i.title)
    if item is None:
        return
    if action == "add":
        report(store.add_to_playlist(item, playlist.id), "Added.")
    else:
        report(store.remove_from_playlist(item, playlist.id), "Removed.")


def run_quiz(store: LearningStore) -> None:
    lesson = store.current_lesson
    quiz = lesson.quiz
    if quiz.is_completed:
        console.print(f"[dim]Quiz already completed: {quiz.score}/{len(quiz.questions)}[/dim]")
        if not Confirm.ask("Retake?", default=False):
            return
        store.reset_quiz(lesson)
        quiz = store.current_lesson.quiz
    for i, question in enumerate(quiz.questions, 1):
        if question.is_answered:
            continue
        console.print(f"[bold]Q{i}.[/bold] {question.text}")
        for n, option in enumerate(question.options, 1):
            console.print(f"  [cyan]{n})[/cyan] {option}")
        answer = session_int_prompt("Your answer", [str(n) for n in range(1, len(question.options) + 1)])
        store.submit_quiz_answer(question.id, answer - 1)
        if question.is_correct:
            console.print("[green]Correct![/green]")
        else:
            console.print(f"[red]Incorrect.[/red] Answer: [green]{question.options[question.correct_answer]}[/green]")
        if question.explanation:
            console.print(f"[dim]{question.explanation}[/dim]")
    quiz = store.current_lesson.quiz
    console.print(f"[bold]Score: {quiz.score}/{len(quiz.questions)}[/bold]\n")


def run_lesson_session(store: LearningStore, module: EducationalModule) -> None:
    store.start_module(module)
    while store.current_lesson is not None:
        module = store.current_module
        lesson = store.current_lesson
        index = module.lesson_index(lesson.id)
        if not store.is_lesson_unlocked(module, index):
            console.print("[yellow]Complete the previous lesson to unlock this one.[/yellow]")
            store.previous_lesson()
            continue
        console.print(Panel(
            lesson.content,
            title=f"{index + 1}/{len(module.lessons)}  {lesson.title}",
            subtitle=format_duration(lesson.duration),
        ))
        if lesson.quiz is not None and Confirm.ask("Take the quiz?", default=not lesson.quiz.is_completed):
            run_quiz(store)
        elif not lesson.is_completed and Confirm.ask("Mark lesson complete?", default=True):
            store.complete_lesson(lesson)
        module = store.current_module
        console.print(f"[dim]Module progress: {format_percentage(module.progress)}[/dim]")
        choice = session_prompt("next / prev", choices=["next", "prev", "q"], default="next")
        status = store.next_lesson() if choice == "next" else store.previous_lesson()
        if status is not Status.OK:
            if module.is_completed:
                console.print("[green]Module complete![/green]")
            break


def cmd_learn(ctx: AppContext):
    store = ctx.learning
    module = pick(
        "Module", store.filtered_modules,
        lambda m: f"{m.title} [dim]({m.difficulty.value}, {completed_lessons_count(m)}/{len(m.lessons)} lessons, "
                  f"{format_percentage(m.progress)})[/dim]",
    )
    if module is None:
        return
    try:
        run_lesson_session(store, module)
    except SessionExitRequested:
        console.print("[dim]Progress saved.[/dim]")


def cmd_dashboard(ctx: AppContext):
    tasks = get_task_stats(ctx.tasks)
    media = get_media_stats(ctx.media)
    learning = get_learning_stats(ctx.learning)

    color = get_progress_color(tasks["progress"])
    console.print(Panel(
        f"Tasks: [bold]{tasks['completed']}/{tasks['total']}[/bold] "
        f"[{color}]{tasks['progress']}% {get_progress_label(tasks['progress'])}[/{color}]"
        + (f"\n[red]{tasks['overdue']} overdue[/red]" if tasks["overdue"] else ""),
        title="Coordinator", border_style="red",
    ))
    console.print(Panel(
        f"Items: [bold]{media['total']}[/bold]  |  Favorites: [bold]{media['favorites']}[/bold]  |  "
        f"Playlists: [bold]{media['playlists']}[/bold]  |  Avg rating: [bold]{media['avg_rating']}[/bold]",
        title="Entertainment", border_style="yellow",
    ))

    table = Table(title="Education")
    table.add_column("Category", style="cyan")
    table.add_column("Modules", justify="right")
    for category, count in learning["per_category"].items():
        table.add_row(category.value, str(count))
    console.print(table)
    color = get_progress_color(learning["overall_progress"])
    console.print(
        f"  Modules: [bold]{learning['completed_modules']}/{learning['total_modules']}[/bold]  |  "
        f"Lessons: [bold]{learning['lessons_completed']}/{learning['total_lessons']}[/bold]  |  "
        f"Study time: [bold]{format_duration(learning['study_time'])}[/bold]  |  "
        f"Progress: [{color}]{learning['overall_progress']}%[/{color}]"
    )


def cmd_import(ctx: AppContext):
    kind = Prompt.ask("Import", choices=["tasks", "media"], default="tasks")
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    if kind == "tasks":
        result = import_tasks(ctx.tasks, file_path)
    else:
        result = import_media_items(ctx.media, file_path)
    console.print(f"[green]Imported {result.added} from {result.filename}[/green]"
                  + (f" [yellow]({result.skipped} skipped)[/yellow]" if result.skipped else ""))


def cmd_tab(ctx: AppContext):
    choice = Prompt.ask("Tab", choices=[t.value for t in MainTab], default=ctx.state.selected_tab.value)
    ctx.state.select_tab(MainTab(choice))


def main():
    settings = load_settings()
    init_logging(settings.log_level, settings.log_format)
    init_db(settings.db_path)
    first_run = not is_seeded(settings.db_path)
    if first_run:
        console.print("[dim]Setting up for first use...[/dim]")
    ctx = AppContext.open(settings.db_path)

    show_welcome()
    if ctx.state.phase is AppPhase.ONBOARDING:
        run_onboarding(ctx)

    commands = {
        "tasks": cmd_tasks,
        "add-task": cmd_add_task,
        "toggle-task": cmd_toggle_task,
        "edit-task": cmd_edit_task,
        "delete-task": cmd_delete_task,
        "media": cmd_media,
        "add-media": cmd_add_media,
        "delete-media": cmd_delete_media,
        "favorite": cmd_favorite,
        "playlists": cmd_playlists,
        "learn": cmd_learn,
        "dashboard": cmd_dashboard,
        "import": cmd_import,
        "tab": cmd_tab,
    }
    while True:
        show_menu(ctx)
        choice = Prompt.ask("\n[bold]>[/bold]", default="tasks").strip().lower()
        try:
            if choice in commands:
                commands[choice](ctx)
            elif choice == "reset-onboarding":
                ctx.state.reset_onboarding()
                run_onboarding(ctx)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]See you soon![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
