#!/usr/bin/env python3
"""
Create the "bigcommerceProduct" content type in Contentful.
Skips creation when the content type already exists.
"""

import sys
from pathlib import Path

# Add parent directory to path to import bc_picker modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from bc_picker.config import get_settings
from bc_picker.core.provisioning import (
    ProvisioningError,
    create_management_client,
    ensure_product_content_type,
)


def main():
    """Provision the content type for the configured space."""
    settings = get_settings()

    if not settings.contentful_access_token or not settings.contentful_space_id:
        print("❌ Error: CONTENTFUL_ACCESS_TOKEN and CONTENTFUL_SPACE_ID must be set", file=sys.stderr)
        sys.exit(1)

    try:
        with create_management_client(settings.contentful_access_token) as client:
            created, content_type = ensure_product_content_type(
                client,
                settings.contentful_space_id,
                settings.contentful_environment
            )
    except ProvisioningError as e:
        print(f"❌ Error creating content type: {str(e)}", file=sys.stderr)
        sys.exit(1)

    content_type_id = content_type.get("sys", {}).get("id")
    if created:
        print('✅ Content type "bigcommerceProduct" created successfully!')
    else:
        print('Content type "bigcommerceProduct" already exists!')
    print(f"Content Type ID: {content_type_id}")


if __name__ == "__main__":
    main()
