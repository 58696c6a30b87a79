#!/usr/bin/env python3
import logging
import os

import aws_cdk as cdk

from stacks.config import load_stack_config
from stacks.online_evaluation_stack import OnlineEvaluationStack

# basicConfig でログを設定
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s,p%(process)s,{%(filename)s:%(lineno)d},%(levelname)s,%(message)s",
)

app = cdk.App()
config = load_stack_config(app)

OnlineEvaluationStack(app, "OnlineEvaluationStack",
    config=config,
    env=cdk.Environment(
        account=os.getenv("CDK_DEFAULT_ACCOUNT"),
        region=os.getenv("CDK_DEFAULT_REGION"),
    ),
    description="Amazon Bedrock AgentCore online evaluation",
)

app.synth()
