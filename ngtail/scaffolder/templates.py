"""Fixed file payloads written into every generated project.

The content is literal: nothing is interpolated, so the bytes written are
identical across projects and stylesheet formats.
"""

from __future__ import annotations

TAILWIND_IMPORT = '@import "tailwindcss";\n'

POSTCSS_CONFIG = """{
  "plugins": {
    "@tailwindcss/postcss": {}
  }
}
"""

GUIDANCE_DOC = """\
# Angular + Tailwind CSS Project

This is an Angular project configured with Tailwind CSS for styling.

## Important Guidelines

### Styling Requirements

- **EXCLUSIVELY use Tailwind CSS** for all UI styles
- Do NOT use traditional CSS/SCSS/Sass/Less for component styling
- Use Tailwind utility classes directly in component templates
- Avoid writing custom CSS unless absolutely necessary

### Tailwind CSS Usage

When styling components, always use Tailwind utility classes:

```html
<!-- Good: Using Tailwind utility classes -->
<div class="flex items-center justify-between p-4 bg-white rounded-lg shadow-md">
  <h1 class="text-2xl font-bold text-gray-800">Title</h1>
  <button class="px-4 py-2 bg-blue-500 text-white rounded hover:bg-blue-600">
    Click Me
  </button>
</div>

<!-- Bad: Using custom CSS -->
<div class="custom-container">...</div>
```

### Component Styling

- Use Tailwind classes in template HTML files
- For complex/reusable styles, use `@apply` directive sparingly in component CSS files
- Prefer composition of utility classes over custom CSS

### Responsive Design

Use Tailwind's responsive prefixes:
- `sm:` - Small screens (640px+)
- `md:` - Medium screens (768px+)
- `lg:` - Large screens (1024px+)
- `xl:` - Extra large screens (1280px+)
- `2xl:` - 2X large screens (1536px+)

### Dark Mode

Use Tailwind's dark mode utilities when implementing dark themes:
```html
<div class="bg-white dark:bg-gray-800 text-gray-900 dark:text-white">
```

## Project Structure

This is a standard Angular project with Tailwind CSS configured via PostCSS.

### Key Files

- `src/styles.css` - Global styles with Tailwind import
- `.postcssrc.json` - PostCSS configuration for Tailwind
- `tailwind.config.js` - Tailwind configuration (if customization needed)

## Commands

- `ng serve` - Start development server
- `ng build` - Build for production
- `ng test` - Run unit tests
- `ng generate component <name>` - Generate a new component
"""
