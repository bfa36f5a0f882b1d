from pathlib import Path
from typing import BinaryIO, Union
import struct
import numpy as np
from PIL import Image

def read(path:Union[str, Path, BinaryIO]) -> np.ndarray:
    """Read an image as a 2D bool array, any pixel brighter than half intensity is set."""
    with Image.open(path) as im: return np.asarray(im.convert("L"), dtype=np.uint8) > 127

def write(data:np.ndarray, path:Union[str, Path]):
    path = Path(path)
    match path.suffix.lower():
        case ".bmp": bmp_write(data, path)
        case ".png": png_write(data, path)
        case _: raise NotImplementedError(f"Writing {path.suffix} format not supported")

def png_write(data:np.ndarray, path:Path):
    Image.fromarray(np.asarray(data, dtype=np.uint8) * 255).convert("1").save(path, format="PNG")

def bmp_write(data:np.ndarray, path:Path):
    """Write a 24-bit BMP from a 2D bool array, set pixels are white."""
    data = np.asarray(data, dtype=bool)
    height, width = data.shape

    # BMP headers
    file_header = struct.pack(
        '<2sIHHI',
        b'BM',            # Magic
        54 + (3*width + (4 - (3*width) % 4) % 4)*height,  # File size
        0,                # Reserved
        0,                # Reserved
        54                # Pixel data offset
    )

    dib_header = struct.pack(
        '<IIIHHIIIIII',
        40,               # Header size
        width,            # Width
        height,           # Height
        1,                # Planes
        24,               # Bits per pixel
        0,                # Compression (BI_RGB)
        0,                # Image size, may be 0 for BI_RGB
        0,                # X pixels/meter
        0,                # Y pixels/meter
        0,                # Colors in palette
        0                 # Important colors
    )

    # Pixel data (BGR format, rows padded to 4-byte alignment)
    row_padding = (4 - (width * 3) % 4) % 4
    pixel_data = bytearray()

    for row in data[::-1]:  # BMPs are stored bottom-to-top
        pixel_data.extend(np.repeat(row.astype(np.uint8) * 255, 3).tobytes())
        pixel_data.extend(b'\x00' * row_padding)

    with open(path, 'wb') as f:
        f.write(file_header)
        f.write(dib_header)
        f.write(pixel_data)
