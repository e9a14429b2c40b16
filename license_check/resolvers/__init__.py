"""Artifact resolvers and POM metadata scanning."""

from license_check.resolvers.base import BaseArtifactResolver
from license_check.resolvers.chain import ChainedResolver
from license_check.resolvers.local import LocalRepositoryResolver
from license_check.resolvers.parent_chain import ParentChainResolver
from license_check.resolvers.remote import RemoteRepositoryResolver

__all__ = [
    "BaseArtifactResolver",
    "ChainedResolver",
    "LocalRepositoryResolver",
    "ParentChainResolver",
    "RemoteRepositoryResolver",
]
