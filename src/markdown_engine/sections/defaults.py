"""Built-in section catalog: templates, detection patterns, canonical order.

Bump ``CATALOG_VERSION`` whenever a template, pattern, or the ordering changes.
"""

from __future__ import annotations

from typing import Sequence

from .catalog import SectionCatalog
from .models import SectionSpec

CATALOG_VERSION = "2024.1"

_BADGES = """\
<!-- Badges -->
![GitHub](https://img.shields.io/badge/github-{{username}}/{{repo}}-000000?style=flat&logo=github)
![Build Status](https://img.shields.io/badge/build-{{buildStatus}}-brightgreen)
![Coverage](https://img.shields.io/badge/coverage-95%25-brightgreen)
![Version](https://img.shields.io/badge/version-{{buildVersion}}-blue)
![License](https://img.shields.io/badge/license-{{licenseType}}-blue)

"""

_DESCRIPTION = """\
## Description

{{projectDesc}}

**Key Features:**
- Feature 1
- Feature 2
- Feature 3

"""

_QUICKSTART = """\
## Quick Start

```bash
# Clone the repository
git clone https://github.com/{{username}}/{{repo}}.git

# Navigate to directory
cd {{repo}}

# Install dependencies
install-command

# Run the application
start-command
```

"""

_PREREQUISITES = """\
## Prerequisites

Before you begin, ensure you have met the following requirements:

- Requirement 1
- Requirement 2
- Requirement 3

"""

_INSTALLATION = """\
## Installation

```bash
package-manager install package-name
```

"""

_CONFIGURATION = """\
## Configuration

Create a `.env` file in the root directory:

```env
API_KEY=your_api_key_here
DATABASE_URL=postgresql://localhost:5432/dbname
PORT=3000
NODE_ENV=development
```

"""

_USAGE = """\
## Usage

```javascript
import { example } from 'package-name';

// Basic usage example
const result = example({
  option1: 'value1',
  option2: true
});

console.log(result);
```

"""

_TESTING = """\
## Testing

Run the test suite:

```bash
# Run all tests
test-command

# Run tests in watch mode
test-command --watch

# Generate coverage report
test-command --coverage
```

"""

_API = """\
## API Documentation

### Base URL
```
{{apiUrl}}
```

### Authentication
```bash
curl -H "Authorization: Bearer YOUR_API_KEY" \\
  {{apiUrl}}/endpoint
```

### Endpoints

#### GET /resource
| Parameter | Type | Required | Description |
|-----------|------|----------|-------------|
| limit | integer | No | Number of items (default: 10) |
| offset | integer | No | Pagination offset |

"""

_TROUBLESHOOTING = """\
## Troubleshooting

### Common Issues

**Issue: Application won't start**
```bash
# Clear cache and reinstall dependencies
rm -rf node_modules package-lock.json
package-manager install
```

**Issue: Port already in use**
```bash
# Find and kill the process using the port
lsof -ti:3000 | xargs kill -9
```

"""

_DEPLOYMENT = """\
## Deployment

### Production Build

```bash
build-command
```

### Deploy

```bash
# Deploy to production
deploy-command
```

"""

_CONTRIBUTING = """\
## Contributing

Contributions are welcome! Please follow these steps:

1. Fork the repository
2. Create a feature branch (`git checkout -b feature/AmazingFeature`)
3. Commit your changes (`git commit -m 'Add some AmazingFeature'`)
4. Push to the branch (`git push origin feature/AmazingFeature`)
5. Open a Pull Request

Please make sure to:
- Follow the existing code style
- Write tests for new features
- Update documentation as needed

"""

_SECURITY = """\
## Security

### Reporting Vulnerabilities

If you discover a security vulnerability, please email {{contactEmail}}. Do not open a public issue.

We take all security reports seriously and will respond within 48 hours.

"""

_LICENSE = """\
## License

This project is licensed under the {{licenseType}} License - see the [LICENSE](LICENSE) file for details.

"""

_CHANGELOG = """\
## Changelog

All notable changes to this project will be documented here.

### [Unreleased]

#### Added
- New feature 1
- New feature 2

#### Changed
- Updated dependency X to version Y

#### Fixed
- Bug fix for issue #123

### [{{buildVersion}}] - {{date}}
#### Added
- Initial release

"""

# Empty bullets and trailing spaces are intentional fill-in points.
_QUICK_PR = (
    "# PR: {{prTitle}}\n"
    "\n"
    "**Date:** {{date}}\n"
    "\n"
    "## Overview\n"
    "<!-- Brief description of what this PR accomplishes and why -->\n"
    "\n"
    "\n"
    "## Key Changes\n"
    "\n"
    "### Component/Module Updates\n"
    "- \n"
    "\n"
    "### Dependency Updates\n"
    "- \n"
    "\n"
    "### Configuration Changes\n"
    "- \n"
    "\n"
    "### Database/Schema Changes\n"
    "- \n"
    "\n"
    "## Testing\n"
    "- [ ] Unit tests passing\n"
    "- [ ] Integration tests passing  \n"
    "- [ ] Cypress/E2E tests updated\n"
    "- [ ] Manual testing complete\n"
    "- [ ] Accessibility verified\n"
    "\n"
    "## Deployment Notes\n"
    "<!-- Any special deployment instructions, migrations, or rollout considerations -->\n"
    "\n"
    "\n"
    "## Related\n"
    "**Ticket:** {{ticketNumber}}\n"
)

DEFAULT_SECTIONS: tuple[SectionSpec, ...] = (
    SectionSpec(
        name="quickPR",
        template=_QUICK_PR,
        patterns=(r"^##?\s*(technical changes)", r"key changes"),
        description="Pull request description skeleton",
    ),
    SectionSpec(
        name="badges",
        template=_BADGES,
        patterns=(
            r"!\[.*?\]\(https://img\.shields\.io",
            r"badge",
            r"build.*status",
            r"coverage",
        ),
        description="Shields.io status badges",
    ),
    SectionSpec(
        name="description",
        template=_DESCRIPTION,
        patterns=(r"^##?\s*(description|about|overview)", r"^##?\s*what is"),
        description="Project description and key features",
    ),
    SectionSpec(
        name="quickstart",
        template=_QUICKSTART,
        patterns=(r"^##?\s*(quick start|quickstart|getting started)",),
        description="Clone-install-run walkthrough",
    ),
    SectionSpec(
        name="prerequisites",
        template=_PREREQUISITES,
        patterns=(r"^##?\s*(prerequisites|requirements|dependencies)",),
    ),
    SectionSpec(
        name="installation",
        template=_INSTALLATION,
        patterns=(r"^##?\s*(installation|install|setup)",),
    ),
    SectionSpec(
        name="configuration",
        template=_CONFIGURATION,
        patterns=(r"^##?\s*(configuration|config|environment)", r"\.env"),
        description="Environment file example",
    ),
    SectionSpec(
        name="usage",
        template=_USAGE,
        patterns=(r"^##?\s*(usage|how to use|examples)",),
    ),
    SectionSpec(
        name="testing",
        template=_TESTING,
        patterns=(r"^##?\s*(test|testing)", r"npm test", r"jest", r"mocha"),
    ),
    SectionSpec(
        name="api",
        template=_API,
        patterns=(r"^##?\s*(api|endpoints|reference)",),
        description="Base URL, authentication, and endpoint table",
    ),
    SectionSpec(
        name="troubleshooting",
        template=_TROUBLESHOOTING,
        patterns=(r"^##?\s*(troubleshoot|faq|common issues)",),
    ),
    SectionSpec(
        name="deployment",
        template=_DEPLOYMENT,
        patterns=(r"^##?\s*(deploy|deployment|production)",),
    ),
    SectionSpec(
        name="contributing",
        template=_CONTRIBUTING,
        patterns=(r"^##?\s*(contribut)",),
    ),
    SectionSpec(
        name="security",
        template=_SECURITY,
        patterns=(r"^##?\s*(security|vulnerab)",),
        description="Vulnerability reporting contact",
    ),
    SectionSpec(
        name="license",
        template=_LICENSE,
        patterns=(r"^##?\s*(license)", r"^## license", r"mit license", r"apache"),
    ),
    SectionSpec(
        name="changelog",
        template=_CHANGELOG,
        patterns=(r"^##?\s*(changelog|releases|history)", r"^## changelog"),
    ),
)


def load_default_sections(
    catalog: SectionCatalog,
    *,
    replace: bool = False,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> None:
    """Register the built-in sections in canonical order."""

    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    for spec in DEFAULT_SECTIONS:
        if include_set is not None and spec.name not in include_set:
            continue
        if spec.name in exclude_set:
            continue
        catalog.register(spec, replace=replace)


_DEFAULT_CATALOG: SectionCatalog | None = None


def default_catalog() -> SectionCatalog:
    """Process-wide catalog seeded from ``DEFAULT_SECTIONS`` on first use."""

    global _DEFAULT_CATALOG
    if _DEFAULT_CATALOG is None:
        catalog = SectionCatalog(version=CATALOG_VERSION, logger_name="markdown_engine.sections")
        load_default_sections(catalog)
        _DEFAULT_CATALOG = catalog
    return _DEFAULT_CATALOG


__all__ = [
    "CATALOG_VERSION",
    "DEFAULT_SECTIONS",
    "default_catalog",
    "load_default_sections",
]
