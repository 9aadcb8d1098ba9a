"""Steps that rewrite and validate the links of the built site."""

import logging

from ..core.link_rewriter import rewrite_links
from ..core.link_validator import LinkValidator
from ..core.step import RunContext, Step, StepError
from ..models import Host
from ..services import is_online

logger = logging.getLogger(__name__)


class LinksStep(Step):
    """Retarget the built site's host-relative links to the run's host."""

    identifier = "links"
    header = "Link Rewrite"
    requires = ("build",)

    def execute(self, context: RunContext) -> None:
        if not context.site_dir.is_dir():
            raise StepError(f"No built site found at {context.site_dir}.")
        rewrite_links(context.site_dir, context.host, context.config.site)
        # The build step's --output copy is taken before links are rewritten
        output_dir = context.output_dir
        if output_dir is not None and output_dir.is_dir():
            if output_dir.resolve() != context.site_dir.resolve():
                rewrite_links(output_dir, context.host, context.config.site)


class ValidateLinksStep(Step):
    """Probe every link in the built site and report broken ones.

    Broken links are reported, never fatal.
    """

    identifier = "validate"
    header = "Link Validation"
    requires = ("links",)

    def execute(self, context: RunContext) -> None:
        if not context.site_dir.is_dir():
            raise StepError(f"No built site found at {context.site_dir}.")

        links_config = context.config.links
        if not is_online(links_config.ping_url):
            logger.warning(f"Skipping link validation: {links_config.ping_url} is unreachable.")
            return
        if context.host == Host.LOCAL and not context.is_hosting:
            logger.warning("The site is not being hosted locally; local links will fail.")

        validator = LinkValidator(context.config.site, timeout=links_config.probe_timeout)
        summary = validator.validate(context.site_dir, context.host)
        if summary.bad:
            logger.warning(f"{summary.bad} broken link(s) found.")
