"""Columns and the identity, void, bucket, truncate and temporal partition transforms."""