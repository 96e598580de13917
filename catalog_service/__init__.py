"""
Product catalog service: Lambda handlers over DynamoDB and S3.
"""
