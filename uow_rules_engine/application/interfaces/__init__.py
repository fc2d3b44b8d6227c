"""
Application Interfaces

Protocols describing work actions as seen by their callers.
"""

from .work_action import IWorkAction, IWorkActionAsync

__all__ = ["IWorkAction", "IWorkActionAsync"]
