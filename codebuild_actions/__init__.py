# -*- coding: utf-8 -*-

"""
CodeBuild build / test actions for CodePipeline, declared as cottonformation
resources.
"""

__version__ = "0.1.1"

__short_description__ = (
    "Bind AWS CodeBuild projects into AWS CodePipeline stages with "
    "validated artifacts and least privilege IAM grants."
)
__license__ = "MIT"
