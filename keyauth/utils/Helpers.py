"""
Helpers for KeyAuth response data: timestamps and file downloads.
"""
import copy
import os
from datetime import datetime
from typing import Any, Dict, Union

from dateutil import tz

TimeValue = Union[datetime, str, int, float]


def _toDatetime(value: TimeValue) -> datetime:
    """Accept a datetime or a unix timestamp in seconds."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz.tzlocal())
        return value
    return datetime.fromtimestamp(int(float(value)), tz=tz.tzlocal())


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def timeSince(value: TimeValue) -> Union[str, int]:
    """
    Time elapsed since `value`.

    Examples:
        3 days ago -> "3 days ago"
        1 hour ago -> "1 hour ago"
        20 seconds ago -> 0
    """
    seconds = int((datetime.now(tz=tz.tzlocal()) - _toDatetime(value)).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return f"{_plural(days, 'day')} ago"
    elif hours > 0:
        return f"{_plural(hours, 'hour')} ago"
    elif minutes > 0:
        return f"{_plural(minutes, 'minute')} ago"
    return 0


def timeUntilExpiry(value: TimeValue) -> str:
    """
    Time remaining until `value`.

    Examples:
        in 2 days -> "2 days left"
        in 45 seconds -> "45 seconds left"
    """
    seconds = int((_toDatetime(value) - datetime.now(tz=tz.tzlocal())).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return f"{_plural(days, 'day')} left"
    elif hours > 0:
        return f"{_plural(hours, 'hour')} left"
    elif minutes > 0:
        return f"{_plural(minutes, 'minute')} left"
    return f"{_plural(seconds, 'second')} left"


def convertUnixTimestampToLocalDate(timestamp: Union[str, int]) -> datetime:
    """Unix timestamp in seconds to a datetime in the local timezone."""
    return datetime.fromtimestamp(int(timestamp), tz=tz.tzlocal())


def convertTimestampsToLocalDates(info: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert `createdate`, `lastlogin` and each subscription `expiry` of a
    user info dict to local datetimes. The input is not modified.
    """
    converted = copy.deepcopy(info)

    for fieldName in ('createdate', 'lastlogin'):
        if converted.get(fieldName) not in (None, ''):
            converted[fieldName] = convertUnixTimestampToLocalDate(converted[fieldName])

    subscriptions = []
    for subscription in converted.get('subscriptions') or []:
        if subscription.get('expiry') not in (None, ''):
            subscription['expiry'] = convertUnixTimestampToLocalDate(subscription['expiry'])
        subscriptions.append(subscription)
    converted['subscriptions'] = subscriptions

    return converted


def _decodeContents(downloadResponse: Dict[str, Any]) -> bytes:
    return bytes.fromhex(downloadResponse.get('contents') or '')


def downloadToString(downloadResponse: Dict[str, Any]) -> str:
    """Decode the hex `contents` of a file download as UTF-8 text."""
    return _decodeContents(downloadResponse).decode('utf-8')


def downloadToFile(downloadResponse: Dict[str, Any], name: str, fileType: str, location: str) -> str:
    """
    Write the decoded `contents` of a file download to disk.

    Args:
        downloadResponse: Response from ClientAPI.download
        name: File name without extension
        fileType: File extension
        location: Target directory

    Returns:
        Path of the written file
    """
    path = os.path.join(location, f"{name}.{fileType}")
    with open(path, 'wb') as fileHandle:
        fileHandle.write(_decodeContents(downloadResponse))
    return path
