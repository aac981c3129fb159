import os
import cloudinary

# Consolidate Cloudinary configuration from environment variables.
CLOUDINARY_CONFIG = {
    'cloud_name': os.environ.get("CLOUDINARY_CLOUD_NAME"),
    'api_key': os.environ.get("CLOUDINARY_API_KEY"),
    'api_secret': os.environ.get("CLOUDINARY_API_SECRET"),
}

# Apply the configuration to Cloudinary.
cloudinary.config(**CLOUDINARY_CONFIG)

# Define the settings for django-cloudinary-storage.
CLOUDINARY_STORAGE = {
    'CLOUD_NAME': CLOUDINARY_CONFIG['cloud_name'],
    'API_KEY': CLOUDINARY_CONFIG['api_key'],
    'API_SECRET': CLOUDINARY_CONFIG['api_secret'],
}

# As Cloudinary serves the media files, MEDIA_URL stays empty.
MEDIA_URL = ""
