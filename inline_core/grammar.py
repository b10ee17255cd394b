"""
Rust Token-Tree Grammar.

This module contains the Lark grammar that lexes Rust source into balanced
token trees. Items such as `mod foo;` are recovered from the trees by the
parser module; the grammar itself only knows about delimiters and token
classes, which is all the inliner needs to splice files together.
"""

rust_grammar = r"""
    start: _tt*

    _tt: brace_group | paren_group | bracket_group
       | DOC_COMMENT | LIFETIME | CHAR | STRING | RAW_STRING | NUMBER | IDENT | PUNCT

    brace_group: LBRACE _tt* RBRACE
    paren_group: LPAREN _tt* RPAREN
    bracket_group: LBRACKET _tt* RBRACKET

    LBRACE: "{"
    RBRACE: "}"
    LPAREN: "("
    RPAREN: ")"
    LBRACKET: "["
    RBRACKET: "]"

    // --- Comments (block forms nest, as in rustc) ---
    DOC_COMMENT.6: /\/\/\/(?!\/)[^\n]*/
                 | /\/\/![^\n]*/
                 | /\/\*\*(?![*\/])(?:[^*\/]|\*(?!\/)|\/(?!\*)|(?P<nested_outer_doc>\/\*(?:[^*\/]|\*(?!\/)|\/(?!\*)|(?&nested_outer_doc))*\*\/))*\*\//
                 | /\/\*!(?:[^*\/]|\*(?!\/)|\/(?!\*)|(?P<nested_inner_doc>\/\*(?:[^*\/]|\*(?!\/)|\/(?!\*)|(?&nested_inner_doc))*\*\/))*\*\//
    LINE_COMMENT.5: /\/\/[^\n]*/
    BLOCK_COMMENT.5: /(?P<nested_comment>\/\*(?:[^*\/]|\*(?!\/)|\/(?!\*)|(?&nested_comment))*\*\/)/

    // --- Literals ---
    RAW_STRING.4: /[bc]?r(?P<raw_hashes>#*)"[\s\S]*?"(?P=raw_hashes)/
    STRING.4: /[bc]?"(?:[^"\\]|\\[\s\S])*"/
    CHAR.3: /b?'(?:[^'\\\n]|\\(?:x[0-9a-fA-F]{2}|u\{[0-9a-fA-F_]{1,6}\}|[nrt\\0'"]))'/
    LIFETIME.2: /'(?:r#)?[^\W\d]\w*/
    NUMBER.2: /(?:0x[0-9a-fA-F_]+|0o[0-7_]+|0b[01_]+|[0-9][0-9_]*(?:\.[0-9][0-9_]*)?(?:[eE][+-]?[0-9_]+)?)(?:[^\W\d]\w*)?/

    // --- Words and punctuation ---
    IDENT.1: /(?:r#)?[^\W\d]\w*/
    PUNCT: />>=|<<=|\.\.\.|\.\.=|::|->|=>|==|!=|<=|>=|&&|\|\||\+=|-=|\*=|\/=|%=|\^=|&=|\|=|<<|>>|\.\.|\/(?![*\/])|[-+*%^!&|=<>@.,;:#$?~]/

    %import common.WS
    %ignore WS
    %ignore LINE_COMMENT
    %ignore BLOCK_COMMENT
"""
