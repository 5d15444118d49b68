from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credential:
    """Registered client credential"""

    client_id: str
    client_secret: str = field(repr=False)
    app_name: str

    def to_dict(self) -> dict[str, str]:
        """Serialize to the credential blob entry shape"""
        return {"client_secret": self.client_secret, "app_name": self.app_name}
