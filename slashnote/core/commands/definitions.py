# slashnote/core/commands/definitions.py
"""Catalogue of slash commands available in notes.

Every command is registered once, at import time, into `registry`. A
condition receives the interpreter and the context and decides whether the
command applies; the executor writes into the update-set.
"""

from datetime import date

from slashnote.core.commands.models import Arity, CommandContext
from slashnote.core.commands.registry import CommandSet
from slashnote.core.commands.updates import UpdateKey, UpdateSet
from slashnote.core.permissions.abilities import Action
from slashnote.core.references.models import ReferenceKind

commands = CommandSet()


# ============================================================================
# Conditions
# ============================================================================


def can_update(interpreter, context: CommandContext) -> bool:
    """User may update the work item itself."""
    return interpreter.can(context, Action.UPDATE)


def can_admin(interpreter, context: CommandContext) -> bool:
    """User may manage the project's metadata for this kind of item."""
    return interpreter.can(context, Action.ADMIN)


def _can_close(interpreter, context: CommandContext) -> bool:
    noteable = context.noteable
    return noteable.persisted and noteable.is_open and can_update(interpreter, context)


def _can_reopen(interpreter, context: CommandContext) -> bool:
    return context.noteable.is_closed and can_update(interpreter, context)


def _can_retitle(interpreter, context: CommandContext) -> bool:
    return context.noteable.persisted and can_update(interpreter, context)


def _can_unassign(interpreter, context: CommandContext) -> bool:
    return context.noteable.has_assignee and can_admin(interpreter, context)


def _can_set_milestone(interpreter, context: CommandContext) -> bool:
    return can_admin(interpreter, context) and interpreter.project_has_active_milestone(context)


def _can_clear_milestone(interpreter, context: CommandContext) -> bool:
    return context.noteable.has_milestone and can_admin(interpreter, context)


def _can_add_labels(interpreter, context: CommandContext) -> bool:
    return can_admin(interpreter, context) and interpreter.project_has_labels(context)


def _can_remove_labels(interpreter, context: CommandContext) -> bool:
    return context.noteable.has_labels and can_admin(interpreter, context)


def _can_add_todo(interpreter, context: CommandContext) -> bool:
    return context.noteable.persisted and not interpreter.todo_exists(context)


def _can_mark_done(interpreter, context: CommandContext) -> bool:
    return interpreter.todo_exists(context)


def _can_subscribe(interpreter, context: CommandContext) -> bool:
    noteable = context.noteable
    return noteable.persisted and not noteable.is_subscribed(context.current_user)


def _can_unsubscribe(interpreter, context: CommandContext) -> bool:
    noteable = context.noteable
    return noteable.persisted and noteable.is_subscribed(context.current_user)


def _can_set_due_date(interpreter, context: CommandContext) -> bool:
    return context.noteable.supports_due_date and can_update(interpreter, context)


def _can_clear_due_date(interpreter, context: CommandContext) -> bool:
    noteable = context.noteable
    return (
        noteable.supports_due_date
        and noteable.has_due_date
        and can_update(interpreter, context)
    )


# ============================================================================
# Commands
# ============================================================================


@commands.command(
    "close",
    description=lambda context: f"Close this {context.noteable.human_name}",
    condition=_can_close,
)
def close(interpreter, context: CommandContext, updates: UpdateSet) -> None:
    updates.set(UpdateKey.STATE_EVENT, "close")


@commands.command(
    "reopen",
    "open",
    description=lambda context: f"Reopen this {context.noteable.human_name}",
    condition=_can_reopen,
)
def reopen(interpreter, context: CommandContext, updates: UpdateSet) -> None:
    updates.set(UpdateKey.STATE_EVENT, "reopen")


@commands.command(
    "title",
    description="Change title",
    params="<New title>",
    condition=_can_retitle,
    arity=Arity.SINGLE,
)
def title(interpreter, context: CommandContext, updates: UpdateSet, new_title: str) -> None:
    updates.set(UpdateKey.TITLE, new_title)


@commands.command(
    "assign",
    "reassign",
    description="Assign",
    params="@user",
    condition=can_admin,
    arity=Arity.MULTIPLE,
    reference=ReferenceKind.USER,
)
def assign(interpreter, context: CommandContext, updates: UpdateSet, *usernames: str) -> None:
    users = interpreter.resolve(context, usernames, ReferenceKind.USER)
    if users:
        updates.set(UpdateKey.ASSIGNEE_ID, users[0].id)


@commands.command(
    "unassign",
    "remove_assignee",
    description="Remove assignee",
    condition=_can_unassign,
)
def unassign(interpreter, context: CommandContext, updates: UpdateSet) -> None:
    updates.set(UpdateKey.ASSIGNEE_ID, None)


@commands.command(
    "milestone",
    description="Set milestone",
    params='%"milestone"',
    condition=_can_set_milestone,
    arity=Arity.MULTIPLE,
    reference=ReferenceKind.MILESTONE,
)
def milestone(
    interpreter, context: CommandContext, updates: UpdateSet, *titles: str
) -> None:
    milestones = interpreter.resolve(context, titles, ReferenceKind.MILESTONE)
    if milestones:
        updates.set(UpdateKey.MILESTONE_ID, milestones[0].id)


@commands.command(
    "clear_milestone",
    "remove_milestone",
    description="Remove milestone",
    condition=_can_clear_milestone,
)
def clear_milestone(interpreter, context: CommandContext, updates: UpdateSet) -> None:
    updates.set(UpdateKey.MILESTONE_ID, None)


@commands.command(
    "label",
    "labels",
    description="Add label(s)",
    params='~label1 ~"label 2"',
    condition=_can_add_labels,
    arity=Arity.MULTIPLE,
    reference=ReferenceKind.LABEL,
)
def label(interpreter, context: CommandContext, updates: UpdateSet, *titles: str) -> None:
    label_ids = interpreter.find_label_ids(context, titles)
    if label_ids:
        updates.set(UpdateKey.ADD_LABEL_IDS, label_ids)


@commands.command(
    "unlabel",
    "remove_label",
    "remove_labels",
    description="Remove label(s)",
    params='~label1 ~"label 2"',
    condition=_can_remove_labels,
    arity=Arity.MULTIPLE,
    reference=ReferenceKind.LABEL,
)
def unlabel(interpreter, context: CommandContext, updates: UpdateSet, *titles: str) -> None:
    label_ids = interpreter.find_label_ids(context, titles)
    if label_ids:
        updates.set(UpdateKey.REMOVE_LABEL_IDS, label_ids)


@commands.command(
    "clear_labels",
    "clear_label",
    description="Remove all labels",
    condition=_can_remove_labels,
)
def clear_labels(interpreter, context: CommandContext, updates: UpdateSet) -> None:
    updates.set(UpdateKey.LABEL_IDS, [])


@commands.command("todo", description="Add a todo", condition=_can_add_todo)
def todo(interpreter, context: CommandContext, updates: UpdateSet) -> None:
    updates.set(UpdateKey.TODO_EVENT, "add")


@commands.command("done", description="Mark todo as done", condition=_can_mark_done)
def done(interpreter, context: CommandContext, updates: UpdateSet) -> None:
    updates.set(UpdateKey.TODO_EVENT, "done")


@commands.command("subscribe", description="Subscribe", condition=_can_subscribe)
def subscribe(interpreter, context: CommandContext, updates: UpdateSet) -> None:
    updates.set(UpdateKey.SUBSCRIPTION_EVENT, "subscribe")


@commands.command("unsubscribe", description="Unsubscribe", condition=_can_unsubscribe)
def unsubscribe(interpreter, context: CommandContext, updates: UpdateSet) -> None:
    updates.set(UpdateKey.SUBSCRIPTION_EVENT, "unsubscribe")


@commands.command(
    "due",
    "due_date",
    description="Set due date",
    params="<in 2 days | this Friday | December 31st>",
    condition=_can_set_due_date,
    arity=Arity.SINGLE,
)
def due(interpreter, context: CommandContext, updates: UpdateSet, expression: str) -> None:
    due_date: date | None = interpreter.parse_date(expression)
    if due_date:
        updates.set(UpdateKey.DUE_DATE, due_date)


@commands.command(
    "clear_due_date",
    "remove_due_date",
    description="Remove due date",
    condition=_can_clear_due_date,
)
def clear_due_date(interpreter, context: CommandContext, updates: UpdateSet) -> None:
    updates.set(UpdateKey.DUE_DATE, None)


# Dummy command so that CC shows up in autocomplete
commands.noop(
    "cc",
    description="CC",
    params="@user",
    arity=Arity.MULTIPLE,
    reference=ReferenceKind.USER,
)


registry = commands.build()
