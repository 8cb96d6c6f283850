"""
Identity of the calling KeyAuth application.
"""
from dataclasses import dataclass

from keyauth.Constants import DEFAULT_APP_VERSION


@dataclass
class App:
    """Application credentials found on the KeyAuth dashboard."""
    name: str
    ownerid: str
    ver: str = DEFAULT_APP_VERSION

    def identityFields(self) -> dict:
        """Fields attached to every outbound request"""
        return {'name': self.name, 'ownerid': self.ownerid}
