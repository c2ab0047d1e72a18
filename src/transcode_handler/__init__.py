"""Lambda entry point for the AWS transcoder."""
