# どこで: `src/gammaramp/interactive/gl/shader.py`。
# 何を: 単色塗りと参照画像描画の GLSL プログラムを生成する。
# なぜ: シェーダソースを renderer から分離し、一箇所で管理するため。

from __future__ import annotations

from typing import Any

FILL_VERTEX_SHADER = """
#version 410

uniform mat4 projection;

in vec2 in_vert;
in vec3 in_color;

out vec3 v_color;

void main() {
    gl_Position = projection * vec4(in_vert, 0.0, 1.0);
    v_color = in_color;
}
"""

FILL_FRAGMENT_SHADER = """
#version 410

in vec3 v_color;

out vec4 frag_color;

void main() {
    frag_color = vec4(v_color, 1.0);
}
"""

IMAGE_VERTEX_SHADER = """
#version 410

uniform mat4 projection;

in vec2 in_vert;
in vec2 in_uv;

out vec2 v_uv;

void main() {
    gl_Position = projection * vec4(in_vert, 0.0, 1.0);
    v_uv = in_uv;
}
"""

IMAGE_FRAGMENT_SHADER = """
#version 410

uniform sampler2D image;

in vec2 v_uv;

out vec4 frag_color;

void main() {
    frag_color = texture(image, v_uv);
}
"""


class Shader:
    """ModernGL プログラムの生成をまとめる。"""

    @staticmethod
    def create_fill_shader(ctx: Any) -> Any:
        """頂点色で塗りつぶすプログラムを返す。"""
        return ctx.program(
            vertex_shader=FILL_VERTEX_SHADER,
            fragment_shader=FILL_FRAGMENT_SHADER,
        )

    @staticmethod
    def create_image_shader(ctx: Any) -> Any:
        """テクスチャを貼るプログラムを返す。"""
        program = ctx.program(
            vertex_shader=IMAGE_VERTEX_SHADER,
            fragment_shader=IMAGE_FRAGMENT_SHADER,
        )
        program["image"].value = 0
        return program
