"""Steps that drive DocFX."""

import logging
import shutil

from ..constants import HOST_READY_TIMEOUT, LOCAL_PORT
from ..core.step import RunContext, Step, StepError
from ..models import Host
from ..services import DocFxError, DocFxMode, run_docfx, serve, wait_until_ready

logger = logging.getLogger(__name__)


class MetadataStep(Step):
    """Extract API metadata from the sources."""

    identifier = "metadata"
    header = "Metadata Extraction"

    def execute(self, context: RunContext) -> None:
        config_path = context.require_docfx_config()
        docfx = context.config.docfx
        if not run_docfx(config_path, DocFxMode.METADATA, docfx.exec, docfx.timeout):
            raise StepError("An error occurred while running the metadata extraction.")


class BuildStep(Step):
    """Build the static site, optionally copying it to an output folder."""

    identifier = "build"
    header = "Build Documentation"
    requires = ("metadata",)

    def clean(self, context: RunContext) -> None:
        if context.site_dir.exists():
            logger.info("Deleting previous output folder ...")
            shutil.rmtree(context.site_dir)

    def execute(self, context: RunContext) -> None:
        config_path = context.require_docfx_config()
        docfx = context.config.docfx
        if not run_docfx(config_path, DocFxMode.BUILD, docfx.exec, docfx.timeout):
            raise StepError("An error occurred while building the documentation.")

        if context.output_dir is not None:
            if not context.site_dir.is_dir():
                raise StepError(f"DocFX reported success but {context.site_dir} is missing.")
            logger.info(f"Copying site to {context.output_dir} ...")
            shutil.copytree(context.site_dir, context.output_dir, dirs_exist_ok=True)


class HostStep(Step):
    """Serve the site locally in a detached DocFX process."""

    identifier = "host"
    header = "Host"
    requires = ("build",)

    def execute(self, context: RunContext) -> None:
        if context.is_ci:
            logger.info("Hosting was skipped due to running on a CI agent.")
            return

        config_path = context.require_docfx_config()
        try:
            process = serve(config_path, context.config.docfx.exec, LOCAL_PORT)
        except DocFxError as e:
            raise StepError(str(e)) from e

        url = context.config.site.base_url(Host.LOCAL)
        if not wait_until_ready(url, HOST_READY_TIMEOUT):
            if process.poll() is not None:
                raise StepError(f"DocFX stopped serving (exit code {process.returncode}).")
            logger.warning(f"{url} is not answering yet; DocFX may still be building.")

        logger.info(f"Documentation should become available at {url}")
        logger.info(f"Stop the DocFX process (PID {process.pid}) to stop hosting.")
        context.is_hosting = True
