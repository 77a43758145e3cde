"""
Template Compiler: mustache 소스 → 렌더 함수 / 직렬화된 함수.

- compile(source) → 렌더 함수 (chevron, 서버 사이드)
- compile(source, as_string=True) → Hogan.js 호환 JS 코드 문자열 (클라이언트 번들용)

직렬화 형식 (Hogan.compile(text, {asString: true})와 동일):
    {code: function (c,p,i) { var t=this;t.b(i=i||"");...return t.fl(); },partials: {...}, subs: {  }}

같은 소스 → 항상 같은 문자열 (partial 심볼 번호는 템플릿 단위로 0부터).
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal, overload

import chevron
from chevron.tokenizer import ChevronError, tokenize

from src.domain.errors import TemplateSyntaxError

RenderFunction = Callable[..., str]

# chevron 토큰 타입
LITERAL = "literal"
VARIABLE = "variable"
NO_ESCAPE = "no escape"
SECTION = "section"
INVERTED = "inverted section"
END = "end"
PARTIAL = "partial"
SET_DELIMITER = "set delimiter"


@dataclass
class Node:
    """파싱된 mustache 노드."""
    kind: str
    key: str = ""
    children: list["Node"] = field(default_factory=list)


# =============================================================================
# Parsing
# =============================================================================

def parse(source: str, name: str = "<string>") -> list[Node]:
    """
    chevron 토큰 스트림 → 노드 트리.

    Raises:
        TemplateSyntaxError: 닫히지 않은 태그/섹션 등
    """
    try:
        tokens = list(tokenize(source))
    except ChevronError as e:
        raise TemplateSyntaxError(str(e), template=name) from e

    root: list[Node] = []
    stack: list[list[Node]] = [root]

    for tag_type, key in tokens:
        if tag_type in (SECTION, INVERTED):
            node = Node(tag_type, key)
            stack[-1].append(node)
            stack.append(node.children)
        elif tag_type == END:
            stack.pop()
        elif tag_type == SET_DELIMITER:
            continue
        elif tag_type == "no escape?":
            # 사용자 정의 구분자에서의 {name}
            stack[-1].append(Node(NO_ESCAPE, key.rstrip("}").strip()))
        else:
            stack[-1].append(Node(tag_type, key))

    return root


# =============================================================================
# Hogan code generation
# =============================================================================

def _esc(text: str) -> str:
    """JS 문자열 리터럴 escape (Hogan esc()와 동일)."""
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def _lookup(key: str) -> str:
    # dotted name은 t.d, 나머지는 t.f
    method = "d" if "." in key else "f"
    return f't.{method}("{_esc(key)}",c,p,'


class _HoganWriter:
    """노드 트리 → Hogan 코드 문자열."""

    def __init__(self) -> None:
        self.partials: dict[str, str] = {}

    def walk(self, nodes: list[Node]) -> str:
        return "".join(self._emit(node) for node in nodes)

    def _emit(self, node: Node) -> str:
        if node.kind == LITERAL:
            return self._literal(node.key)
        if node.kind == VARIABLE:
            return f"t.b(t.v({_lookup(node.key)}0)));"
        if node.kind == NO_ESCAPE:
            return f"t.b(t.t({_lookup(node.key)}0)));"
        if node.kind == SECTION:
            return (
                f'if(t.s({_lookup(node.key)}1),c,p,0,0,0,"{{{{ }}}}"))'
                f"{{t.rs(c,p,function(c,p,t){{{self.walk(node.children)}}});c.pop();}}"
            )
        if node.kind == INVERTED:
            return (
                f'if(!t.s({_lookup(node.key)}1),c,p,1,0,0,""))'
                f"{{{self.walk(node.children)}}};"
            )
        if node.kind == PARTIAL:
            symbol = f"<{node.key}{len(self.partials)}"
            self.partials[symbol] = node.key
            return f't.b(t.rp("{_esc(symbol)}",c,p,""));'
        return ""

    @staticmethod
    def _literal(text: str) -> str:
        code = []
        for index, line in enumerate(text.split("\n")):
            if index > 0:
                code.append('t.b("\\n" + i);')
            if line:
                code.append(f't.b("{_esc(line)}");')
        return "".join(code)

    def partials_code(self) -> str:
        items = [
            f'"{_esc(symbol)}":{{name:"{_esc(name)}", partials: {{}}, subs: {{  }}}}'
            for symbol, name in self.partials.items()
        ]
        return "partials: {" + ",".join(items) + "}, subs: {  }"


def generate_script(nodes: list[Node]) -> str:
    """노드 트리 → Hogan.Template 생성자 인자 (JS 객체 리터럴 문자열)."""
    writer = _HoganWriter()
    body = writer.walk(nodes)
    return (
        '{code: function (c,p,i) { var t=this;t.b(i=i||"");'
        + body
        + "return t.fl(); },"
        + writer.partials_code()
        + "}"
    )


# =============================================================================
# Compiler
# =============================================================================

class TemplateCompiler:
    """
    mustache 컴파일러.

    부작용 없음. 문법 오류는 TemplateSyntaxError로 그대로 전파.
    """

    @overload
    def compile(
        self, source: str, *, as_string: Literal[False] = ..., name: str = ...
    ) -> RenderFunction: ...

    @overload
    def compile(
        self, source: str, *, as_string: Literal[True], name: str = ...
    ) -> str: ...

    def compile(
        self,
        source: str,
        *,
        as_string: bool = False,
        name: str = "<string>",
    ) -> RenderFunction | str:
        """
        템플릿 컴파일.

        Args:
            source: mustache 소스
            as_string: True면 직렬화된 JS 코드 반환
            name: 에러 컨텍스트용 템플릿 이름

        Returns:
            렌더 함수 또는 직렬화 문자열

        Raises:
            TemplateSyntaxError: 문법 오류
        """
        nodes = parse(source, name)
        if as_string:
            return generate_script(nodes)

        def render(
            context: dict[str, Any] | None = None,
            partials: dict[str, str] | None = None,
        ) -> str:
            try:
                return chevron.render(
                    source,
                    context or {},
                    partials_path=None,
                    partials_dict=partials or {},
                )
            except ChevronError as e:
                # partial 소스의 문법 오류
                raise TemplateSyntaxError(str(e), template=name) from e

        return render
