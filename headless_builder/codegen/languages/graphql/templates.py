"""
Built-in SDL templates for the GraphQL generator.

Each template renders one block without a trailing newline; the generator
joins blocks itself.
"""

COMPONENT_TYPE_TEMPLATE = '''"""
{{ component_name | block_string }} component
"""
type {{ type_name }} {
{%- for field in fields %}
{%- if not loop.first %}
{% endif %}
  """{{ field.description | block_string }}"""
  {{ field.name }}: {{ field.type }}
{%- endfor %}
}'''

UNION_TEMPLATE = '''"""
Union type for all page components
"""
union {{ union_name }} = {{ members | join(" | ") }}'''

PAGE_TYPE_TEMPLATE = '''"""
Page: {{ page_name | block_string }}
"""
type {{ type_name }} {
  """Page ID"""
  id: ID!

  """Page name"""
  name: String!

  """Page slug"""
  slug: String!

  """Page title"""
  title: String

  """Page description"""
  description: String

  """Page components"""
  components: [{{ union_name }}!]!
}'''

HEADER_TEMPLATE = "{{ header | comment }}"

BUILTIN_TEMPLATES = {
    "component_type.graphql.j2": COMPONENT_TYPE_TEMPLATE,
    "union.graphql.j2": UNION_TEMPLATE,
    "page_type.graphql.j2": PAGE_TYPE_TEMPLATE,
    "header.graphql.j2": HEADER_TEMPLATE,
}
