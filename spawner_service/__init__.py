"""Spawner service: EBS volume and snapshot operations on AWS."""

__version__ = "0.1.0"
