"""ngtail scaffolder -- delegated generation and post-generation changes.

Quick usage::

    from ngtail.scaffolder import DelegatedGenerator, PostGenerationMutator

    project = await DelegatedGenerator(config).generate(params)
    await PostGenerationMutator(config).apply(project, params)
"""

from ngtail.scaffolder.generator import DelegatedGenerator
from ngtail.scaffolder.mutator import PostGenerationMutator, prepend_import

__all__ = [
    "DelegatedGenerator",
    "PostGenerationMutator",
    "prepend_import",
]
