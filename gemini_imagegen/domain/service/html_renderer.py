"""HTML Renderer Domain Service - Domain Layer"""

from html import escape
from typing import List

IMAGE_ALT = "Generated image"

GALLERY_STYLE = """<style>
.image-gallery {{
  display: flex;
  flex-wrap: wrap;
  gap: 16px;
  padding: 10px;
}}
.image-container {{
  width: {width}px;
  height: {height}px;
  overflow: hidden;
  border-radius: 8px;
  box-shadow: 0 2px 6px rgba(0, 0, 0, 0.2);
  transition: transform 0.2s ease-in-out;
}}
.image-container:hover {{
  transform: scale(1.05);
}}
.image-container img {{
  width: 100%;
  height: 100%;
  object-fit: contain;
}}
</style>"""


def img_tag(src: str, width: int, height: int) -> str:
    """单个 <img> 标签 (src 仅做 HTML 属性转义)"""
    return (
        f'<img src="{escape(src, quote=True)}" width="{width}" height="{height}" '
        f'alt="{IMAGE_ALT}" style="margin: 10px;" />'
    )


def render_images(sources: List[str], width: int, height: int) -> str:
    """渲染为以换行分隔的 <img> 标签"""
    return "\n".join(img_tag(src, width, height) for src in sources)


def render_gallery(sources: List[str], width: int, height: int) -> str:
    """渲染为带内联样式的画廊"""
    lines = [GALLERY_STYLE.format(width=width, height=height), '<div class="image-gallery">']
    for index, src in enumerate(sources, start=1):
        lines.append(
            f'  <div class="image-container">'
            f'<img src="{escape(src, quote=True)}" width="{width}" height="{height}" '
            f'alt="{IMAGE_ALT} {index}" /></div>'
        )
    lines.append("</div>")
    return "\n".join(lines)
