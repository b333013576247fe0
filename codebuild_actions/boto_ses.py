# -*- coding: utf-8 -*-

import boto3
from boto_session_manager import BotoSesManager

boto_ses = boto3.session.Session()
bsm = BotoSesManager(region_name=boto_ses.region_name)

aws_account_id = bsm.aws_account_id
aws_region = bsm.aws_region
