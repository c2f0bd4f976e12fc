"""
.. autoclasstree:: ridegate.permissions

This module contains the various permission types. A permission is essentially
just an object (either function or class) that can be called asynchronously
and raises a RoutePermissionError in the case of a failed permission.
"""

from ridegate.permissions.decorators import requires
from ridegate.permissions.permission import Permission, RoutePermissionError
from ridegate.permissions.users import UserMatchesSession, UserIsOperator
