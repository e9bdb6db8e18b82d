"""
PyInfra deployment entry point for k8s-dev.

The installer needs root only to create the storage directories. That step
can be run on its own, and the installer then runs unprivileged:
    sudo pyinfra @local deploy.provision_storage
    pyinfra @local deploy.install_apps

Each deploy is implemented as a separate module under the k8s_dev.deploys
package.
"""

from k8s_dev.deploys.install import install_apps
from k8s_dev.deploys.storage import provision_storage

__all__ = [
    "provision_storage",
    "install_apps",
]


def all_in_one():
    """Provision storage and deploy all applications."""
    provision_storage()
    install_apps()
