"""Reconciliation helpers for Redis setups on Kubernetes: settings, feature gates, metadata, labels, finalizers, disruption budgets and cluster queries."""

__version__ = "0.20.2"