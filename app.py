#!/usr/bin/env python3
# Third Party
import aws_cdk as cdk

# Local Modules
from fluent_cdk.stacks import SampleServiceStack

app = cdk.App()

stack_suffix = app.node.try_get_context("stack_suffix") or ""

SampleServiceStack(
    app,
    f"FluentCdkSample{stack_suffix.capitalize()}",
    stack_suffix=stack_suffix,
)

app.synth()
