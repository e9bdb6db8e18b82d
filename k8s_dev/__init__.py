"""Installs the k8s-dev home-lab applications onto a Kubernetes cluster."""

__version__ = "0.1.0"
