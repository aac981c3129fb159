from PIL import Image
from io import BytesIO
from django.core.files.uploadedfile import InMemoryUploadedFile
import uuid
from rest_framework.exceptions import ValidationError

MAX_SIZE = 10 * 1024 * 1024  # 10 MB
ALLOWED_TYPES = ['jpeg', 'png', 'gif']


def detect_image_format(file):
    """
    Identifies the image format of an uploaded file using Pillow, leaving the
    file position where it was.

    Args:
        file: The file-like object to inspect.

    Returns:
        str: Lower-case format name (e.g. 'png').

    Raises:
        ValidationError: When the file is not a readable image.
    """
    position = file.tell() if hasattr(file, 'tell') else 0
    try:
        with Image.open(file) as img:
            img_format = (img.format or '').lower()
            img.verify()
    except Exception as e:
        raise ValidationError(f"Invalid image file: {str(e)}")
    finally:
        file.seek(position)
    return img_format


def optimize_image(image):
    """
    Optimizes an image file for uploads:
      - Opens the image and converts it to RGB.
      - Creates a thumbnail (max 800x800) using LANCZOS resampling.
      - Saves the image into an in-memory file, applying quality and optimization
        settings based on the file format.

    Args:
        image: A file-like object representing the uploaded image.

    Returns:
        InMemoryUploadedFile: A new, optimized image file.

    Raises:
        ValidationError: When the image cannot be opened or processed.
    """
    try:
        img = Image.open(image)
        img_format = img.format if img.format is not None else 'JPEG'
        img = img.convert("RGB")
    except Exception as e:
        raise ValidationError(f"Invalid image file: {str(e)}")

    max_size = (800, 800)
    img.thumbnail(max_size, Image.Resampling.LANCZOS)
    buffer = BytesIO()
    format_lower = img_format.lower()

    if format_lower in ['jpeg', 'jpg']:
        img.save(buffer, format='JPEG', quality=80, optimize=True)
        format_lower = 'jpeg'
    elif format_lower == 'png':
        img.save(buffer, format='PNG', optimize=True)
    else:
        # Fallback to JPEG for everything else.
        img.save(buffer, format='JPEG', quality=80, optimize=True)
        format_lower = 'jpeg'

    buffer.seek(0)
    new_file_name = f"{uuid.uuid4().hex}.{format_lower}"
    optimized_image = InMemoryUploadedFile(
        file=buffer,
        field_name='ImageField',
        name=new_file_name,
        content_type=f'image/{format_lower}',
        size=buffer.getbuffer().nbytes,
        charset=None
    )
    return optimized_image


def validate_uploaded_file(file):
    """
    Validates an uploaded image file without modifying or optimizing it.
      - Checks that the file size is within limits.
      - Verifies with Pillow that the file is of an allowed image type.

    Args:
        file: The uploaded image file.

    Raises:
        ValidationError: If the file size exceeds 10 MB or if the file type is unsupported.
    """
    if file.size > MAX_SIZE:
        raise ValidationError("Image size should not exceed 10 MB.")

    if detect_image_format(file) not in ALLOWED_TYPES:
        raise ValidationError("Unsupported image type. Please use jpeg, png, or gif.")


def process_uploaded_file(file):
    """
    Validates and optimizes an uploaded image file, ready for storage.

    Raises:
        ValidationError: If the file is too large, of the wrong type or cannot be optimized.
    """
    validate_uploaded_file(file)

    try:
        optimized_file = optimize_image(file)
    except ValidationError:
        raise
    except Exception as e:
        raise ValidationError(f"Failed to optimize image: {str(e)}")

    return optimized_file
