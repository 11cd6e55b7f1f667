from dataclasses import dataclass

import pulumi

DEFAULT_DOMAIN = "randoeats.com"


class SiteConfigError(Exception):
    def __init__(self, key):
        self.key = key
        super().__init__(
            f"Missing required configuration value '{key}'; "
            f"set it with `pulumi config set {key} <value>`"
        )


def _clean(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class SiteConfig:
    """Resolved stack settings handed to StaticSiteStack."""

    zone_id: str
    account_id: str
    domain: str = DEFAULT_DOMAIN

    @classmethod
    def resolve(cls, zone_id, account_id, domain=None):
        zone_id = _clean(zone_id)
        if zone_id is None:
            raise SiteConfigError("zoneId")
        account_id = _clean(account_id)
        if account_id is None:
            raise SiteConfigError("accountId")
        return cls(
            zone_id=zone_id,
            account_id=account_id,
            domain=_clean(domain) or DEFAULT_DOMAIN,
        )

    @classmethod
    def from_pulumi_config(cls, config):
        site_config = cls.resolve(
            zone_id=config.get("zoneId"),
            account_id=config.get("accountId"),
            domain=config.get("domain"),
        )
        pulumi.log.debug(f"Resolved site config for domain {site_config.domain}")
        return site_config
