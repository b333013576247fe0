# -*- coding: utf-8 -*-

class Config:
    project_name = "codebuild_actions"
    stage = "dev"
    log_level = "INFO"

    codebuild_image = "aws/codebuild/standard:7.0"
    codebuild_compute_type = "BUILD_GENERAL1_SMALL"
    codebuild_environment_type = "LINUX_CONTAINER"

    source_object_key = "source/source.zip"

    @property
    def project_name_slug(self):
        return self.project_name.replace("_", "-")

config = Config()

if __name__ == "__main__":
    print(config.project_name_slug)
