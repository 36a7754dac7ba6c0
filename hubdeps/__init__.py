"""hubdeps: dependency automation for the JupyterHub Helm chart.

Provides the ``dependencies`` command:
  - ``freeze``        refreeze images/hub/requirements.txt with pip-compile
  - ``outdated``      list outdated packages in the hub dependencies image
  - ``watch-images``  bump image tags pinned in values.yaml
  - ``watch-package`` bump the jupyterhub pin from PyPI and refreeze
"""

__version__ = "0.1.0"
__description__ = "Dependency automation for the JupyterHub Helm chart"

from hubdeps.cli.app import app as cli

__all__ = ["cli", "__version__"]
