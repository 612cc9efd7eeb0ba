"""
TaskDesk task client.

Client-side core of the task board page:
- TaskActionController: drives the create/edit/view/delete dialog
- TaskActionState: which action is open against which task
- TaskListStore: the page's task list, reconciled after confirmed calls
- codec: comma-joined assignees and tag lists for single-field forms
- HttpTaskService: RemoteTaskService over the HTTP API
"""
from taskclient.action_state import (
    ActionMode,
    TaskAction,
    TaskActionState,
)
from taskclient.controller import TaskActionController
from taskclient.forms import TaskForm
from taskclient.notifications import Notification, NotificationKind, NotificationLog
from taskclient.remote import HttpTaskService, RemoteResult, RemoteTaskService
from taskclient.task_store import TaskListStore

__all__ = [
    "ActionMode",
    "TaskAction",
    "TaskActionState",
    "TaskActionController",
    "TaskForm",
    "Notification",
    "NotificationKind",
    "NotificationLog",
    "HttpTaskService",
    "RemoteResult",
    "RemoteTaskService",
    "TaskListStore",
]
