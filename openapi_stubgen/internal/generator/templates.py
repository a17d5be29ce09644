class PythonTemplates:
    """Шаблоны Python файлов"""

    header = "# Auto-generated by openapi-stubgen. Namespace: {namespace}\n"

    model = """{header}
from typing import TYPE_CHECKING, Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
{type_checking}

class {name}(BaseModel):
{members}
"""

    type_checking = """
if TYPE_CHECKING:
{imports}
"""

    model_config = "model_config = ConfigDict(populate_by_name=True)"

    field = "{name}: {var_type} = None"

    aliased_field = "{name}: {var_type} = Field(default=None, alias={alias})"

    client = """{header}
from typing import Any, List, Optional
{imports}

class {name}:
{members}
"""

    method = """async def {name}({parameters}) -> {return_type}:
    raise NotImplementedError({operation})"""

    package_init = """{header}
{imports}
{rebuilds}
__all__ = [{exports}]
"""

    empty_body = "pass"


class CSharpTemplates:
    """Шаблоны C# файлов"""

    model = """using System;
using System.Collections.Generic;
using System.Text.Json.Serialization;

namespace {namespace}
{{
    public class {name}
    {{
{members}
    }}
}}
"""

    property = "public {var_type} {name} {{ get; set; }}"

    client = """using System;
using System.Collections.Generic;
using System.Net.Http;
using System.Threading.Tasks;

namespace {namespace}
{{
    public class {name}
    {{
{members}
    }}
}}
"""

    method = """public async {return_type} {name}({parameters})
{{
    throw new NotImplementedException();
}}"""


python_templates = PythonTemplates()
csharp_templates = CSharpTemplates()
