try:
    import boto3  # type: ignore
except ImportError:  # Optional; only needed for R2 upload
    boto3 = None

from gameday import config


def r2_configured():
    return all([config.R2_ACCOUNT_ID, config.R2_ACCESS_KEY_ID, config.R2_SECRET_ACCESS_KEY])


def upload_to_r2(paths, log_func=None):
    """
    Upload snapshot files to Cloudflare R2, keyed by file name.
    Returns True if successful, False otherwise.
    log_func: optional logging function (defaults to print)
    """
    log = log_func or print

    if not boto3:
        log("R2 upload skipped: boto3 not installed")
        return False

    if not r2_configured():
        log("R2 upload skipped: missing R2 credentials")
        return False

    try:
        s3 = boto3.client(
            "s3",
            endpoint_url=f"https://{config.R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
            aws_access_key_id=config.R2_ACCESS_KEY_ID,
            aws_secret_access_key=config.R2_SECRET_ACCESS_KEY,
        )

        uploaded = []
        for path in paths:
            if not path.exists():
                continue
            content_type = "application/json" if path.suffix == ".json" else "text/plain"
            with open(path, "rb") as f:
                s3.put_object(
                    Bucket=config.R2_BUCKET_NAME,
                    Key=path.name,
                    Body=f.read(),
                    ContentType=content_type,
                    CacheControl="no-store",
                )
            uploaded.append(path.name)

        log(f"Uploaded to R2: {', '.join(uploaded)}")
        return True
    except Exception as e:
        log(f"R2 upload failed: {e}")
        return False
