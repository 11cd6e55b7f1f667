"""randoeats web edge: Cloudflare Pages, www DNS and the apex redirect."""

import pulumi

from site_config import SiteConfig
from site_stack import StaticSiteStack

config = SiteConfig.from_pulumi_config(pulumi.Config())

site = StaticSiteStack("randoeats-site", config)

for output_name, value in site.outputs.items():
    pulumi.export(output_name, value)
