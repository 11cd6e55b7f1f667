from typing import Any, Dict, NamedTuple

import pulumi
import pulumi_cloudflare as cloudflare

from site_config import SiteConfig

PROJECT_NAME = "randoeats"
PRODUCTION_BRANCH = "main"
COMPATIBILITY_DATE = "2024-01-01"

# Cloudflare assigns <project>.pages.dev; the record does not read it back from the project.
PAGES_DEV_TARGET = "randoeats.pages.dev"
AUTOMATIC_TTL = 1
DNS_COMMENT = "Managed by Pulumi - Flutter Web on Cloudflare Pages"

REDIRECT_PHASE = "http_request_dynamic_redirect"
REDIRECT_STATUS_CODE = 301

PRODUCTION_URL = "https://www.{domain}"
PAGES_DEV_URL = "https://{name}.pages.dev"


class SiteDeclarations(NamedTuple):
    pages_project: Dict[str, Any]
    pages_domain: Dict[str, Any]
    dns_record: Dict[str, Any]
    apex_redirect: Dict[str, Any]
    outputs: Dict[str, Any]


def site_declarations(config: SiteConfig) -> SiteDeclarations:
    """Build the keyword arguments for every resource of the site.

    Nothing is registered with the engine here; StaticSiteStack feeds these
    into the Cloudflare resources. The Pages domain's project_name is replaced
    by the project's name output so the engine orders the two.
    """
    domain = config.domain
    www_domain = f"www.{domain}"

    pages_project = {
        "account_id": config.account_id,
        "name": PROJECT_NAME,
        "production_branch": PRODUCTION_BRANCH,
        "build_config": {
            "build_command": "",
            "destination_dir": "",
        },
        "deployment_configs": {
            "production": {"compatibility_date": COMPATIBILITY_DATE},
            "preview": {"compatibility_date": COMPATIBILITY_DATE},
        },
    }

    pages_domain = {
        "account_id": config.account_id,
        "project_name": PROJECT_NAME,
        "name": www_domain,
    }

    dns_record = {
        "zone_id": config.zone_id,
        "name": "www",
        "type": "CNAME",
        "content": PAGES_DEV_TARGET,
        "proxied": True,
        "ttl": AUTOMATIC_TTL,
        "comment": DNS_COMMENT,
    }

    apex_redirect = {
        "zone_id": config.zone_id,
        "name": "Apex to www redirect",
        "kind": "zone",
        "phase": REDIRECT_PHASE,
        "rules": [
            {
                "action": "redirect",
                "action_parameters": {
                    "from_value": {
                        "status_code": REDIRECT_STATUS_CODE,
                        "target_url": {
                            "expression": f'concat("https://{www_domain}", http.request.uri.path)',
                        },
                        "preserve_query_string": True,
                    },
                },
                "expression": f'(http.host eq "{domain}")',
                "description": "Redirect apex to www",
                "enabled": True,
            },
        ],
    }

    outputs = {
        "pagesProjectName": PROJECT_NAME,
        "productionUrl": PRODUCTION_URL.format(domain=domain),
        "pagesDevUrl": PAGES_DEV_URL.format(name=PROJECT_NAME),
    }

    return SiteDeclarations(pages_project, pages_domain, dns_record, apex_redirect, outputs)


def project_outputs(project, domain):
    return {
        "pagesProjectName": project.name,
        "pagesProjectId": project.id,
        "productionUrl": pulumi.Output.concat("https://www.", domain),
        "pagesDevUrl": pulumi.Output.concat("https://", project.name, ".pages.dev"),
    }


class StaticSiteStack(pulumi.ComponentResource):
    def __init__(self, name, config: SiteConfig, opts=None):
        super().__init__("randoeats:site:StaticSiteStack", name, None, opts)

        declarations = site_declarations(config)
        child_opts = pulumi.ResourceOptions(parent=self)

        self.pages_project = self.pages_project_creation(declarations, child_opts)
        self.pages_domain = self.pages_domain_creation(declarations, self.pages_project, child_opts)
        self.dns_record = self.dns_record_creation(declarations, child_opts)
        self.apex_redirect = self.apex_redirect_creation(declarations, child_opts)

        self.outputs = project_outputs(self.pages_project, config.domain)
        self.register_outputs(self.outputs)

        pulumi.log.info(f"Declared Cloudflare Pages site for www.{config.domain}")

    def pages_project_creation(self, declarations, opts):
        return cloudflare.PagesProject("randoeats-web", opts=opts, **declarations.pages_project)

    def pages_domain_creation(self, declarations, pages_project, opts):
        args = dict(declarations.pages_domain, project_name=pages_project.name)
        return cloudflare.PagesDomain("www-domain", opts=opts, **args)

    def dns_record_creation(self, declarations, opts):
        return cloudflare.DnsRecord("www-dns-record", opts=opts, **declarations.dns_record)

    def apex_redirect_creation(self, declarations, opts):
        return cloudflare.Ruleset("apex-redirect", opts=opts, **declarations.apex_redirect)
